"""Configuration layer: constants and typed config dataclasses."""

from great_escape.config.constants import (
    BOARD_HEIGHT,
    BOARD_WIDTH,
    FLUSH_THRESHOLD,
    MAX_PLAYERS,
    MAX_TURNS,
    UNREACHABLE,
    WALLS_PER_PLAYER,
)
from great_escape.config.types import MatchConfig, PolicyConfig, ScoringWeights

__all__ = [
    "BOARD_HEIGHT",
    "BOARD_WIDTH",
    "FLUSH_THRESHOLD",
    "MAX_PLAYERS",
    "MAX_TURNS",
    "MatchConfig",
    "PolicyConfig",
    "ScoringWeights",
    "UNREACHABLE",
    "WALLS_PER_PLAYER",
]
