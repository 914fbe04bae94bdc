"""Engine layer: wall impact evaluation and the per-turn decision policy."""

from great_escape.engine.evaluator import (
    WallEvaluation,
    WallSearch,
    candidate_walls,
    evaluate_wall,
    select_best_wall,
)
from great_escape.engine.policy import (
    Action,
    Decision,
    MoveAction,
    PlaceWallAction,
    TurnState,
    decide,
)

__all__ = [
    "Action",
    "Decision",
    "MoveAction",
    "PlaceWallAction",
    "TurnState",
    "WallEvaluation",
    "WallSearch",
    "candidate_walls",
    "decide",
    "evaluate_wall",
    "select_best_wall",
]
