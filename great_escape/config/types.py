"""Configuration dataclasses for the decision policy and local matches.

All frozen dataclasses that parameterise the wall heuristics, per-turn
budgets, and self-play matches live here.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from great_escape.config.constants import (
    BOARD_HEIGHT,
    BOARD_WIDTH,
    FIRST_TURN_BUDGET_MS,
    LEADER_DISTANCE_THRESHOLD,
    LEADER_WEIGHT,
    MAX_PLAYERS,
    MAX_TURNS,
    OTHER_WEIGHT,
    SAFETY_MARGIN,
    SELF_WEIGHT,
    TURN_BUDGET_MS,
    WALLS_PER_PLAYER,
)

__all__ = [
    "MatchConfig",
    "PolicyConfig",
    "ScoringWeights",
]


@dataclass(frozen=True)
class ScoringWeights:
    """Linear weights applied to per-player distance deltas of a wall."""

    leader: int = LEADER_WEIGHT
    self_: int = SELF_WEIGHT
    other: int = OTHER_WEIGHT

    def score(self, impact_on_leader: int, impact_on_self: int, impact_on_other: int) -> int:
        """Combine distance deltas into a single comparable score."""
        return (
            self.leader * impact_on_leader
            - self.self_ * impact_on_self
            + self.other * impact_on_other
        )


@dataclass(frozen=True)
class PolicyConfig:
    """Tunable knobs of the per-turn decision policy."""

    leader_distance_threshold: int = LEADER_DISTANCE_THRESHOLD
    safety_margin: int = SAFETY_MARGIN
    weights: ScoringWeights = field(default_factory=ScoringWeights)
    turn_budget_ms: int = TURN_BUDGET_MS
    first_turn_budget_ms: int = FIRST_TURN_BUDGET_MS
    sticky_walls: bool = True

    def __post_init__(self) -> None:
        if self.leader_distance_threshold < 0:
            raise ValueError("leader_distance_threshold must be >= 0")
        if self.safety_margin < 0:
            raise ValueError("safety_margin must be >= 0")
        if self.turn_budget_ms < 1:
            raise ValueError("turn_budget_ms must be >= 1")
        if self.first_turn_budget_ms < self.turn_budget_ms:
            raise ValueError("first_turn_budget_ms must be >= turn_budget_ms")

    def budget_seconds(self, turn: int) -> float:
        """Wall-clock budget for the given 1-based turn number."""
        budget_ms = self.first_turn_budget_ms if turn <= 1 else self.turn_budget_ms
        return budget_ms / 1000.0


@dataclass(frozen=True)
class MatchConfig:
    """Parameters of one local self-play match."""

    width: int = BOARD_WIDTH
    height: int = BOARD_HEIGHT
    player_count: int = 2
    max_turns: int = MAX_TURNS
    seed: int = 0
    walls_per_player: int | None = None

    def __post_init__(self) -> None:
        if self.width < 2 or self.height < 2:
            raise ValueError("board must be at least 2x2")
        if not 2 <= self.player_count <= MAX_PLAYERS:
            raise ValueError(f"player_count must be in [2, {MAX_PLAYERS}]")
        if self.max_turns < 1:
            raise ValueError("max_turns must be >= 1")
        if self.walls_per_player is not None and self.walls_per_player < 0:
            raise ValueError("walls_per_player must be >= 0")

    @property
    def wall_stock(self) -> int:
        """Walls granted to each player at the start of the match."""
        if self.walls_per_player is not None:
            return self.walls_per_player
        return WALLS_PER_PLAYER[self.player_count]
