"""Centralized game and policy constants.

All magic numbers that appear across multiple modules are defined here.
Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

BOARD_WIDTH = 9
"""Default board width in cells."""

BOARD_HEIGHT = 9
"""Default board height in cells."""

MAX_PLAYERS = 3
"""Largest supported player count."""

WALLS_PER_PLAYER: dict[int, int] = {2: 10, 3: 6}
"""Starting wall stock keyed by player count."""

UNREACHABLE = 2**31 - 1
"""Distance sentinel for cells with no path to the goal edge."""

LEADER_DISTANCE_THRESHOLD = 4
"""Start walling once the leader is strictly closer than this to its goal."""

SAFETY_MARGIN = 2
"""Last-placed player must be further than this from its goal to afford a wall."""

LEADER_WEIGHT = 100
"""Score weight for the distance added to the leader."""

SELF_WEIGHT = 70
"""Score weight (subtracted) for the distance added to the acting player."""

OTHER_WEIGHT = 40
"""Score weight for the distance added to the remaining third player."""

TURN_BUDGET_MS = 100
"""Per-turn wall-clock budget enforced by the game engine."""

FIRST_TURN_BUDGET_MS = 1000
"""Budget for the first turn, which the engine grants extra time."""

MAX_TURNS = 100
"""Default turn limit for a local self-play match."""

FLUSH_THRESHOLD = 4_096
"""Flush decision log rows to Parquet once this in-memory row count is reached."""
