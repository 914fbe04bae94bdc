"""Domain layer: board geometry, collision model, legality, pathfinding, ranking."""

from great_escape.domain.board import BoardSnapshot, PlayerState
from great_escape.domain.collision import CollisionMatrix
from great_escape.domain.grid import CARDINALS, Coord, Direction, GoalEdge, Grid, Orientation, Wall
from great_escape.domain.legality import in_bounds, is_legal, walls_compatible
from great_escape.domain.pathfinder import DistanceField, compute_distances
from great_escape.domain.ranking import RankedPlayer, Ranking, rank_players, turn_order

__all__ = [
    "BoardSnapshot",
    "CARDINALS",
    "CollisionMatrix",
    "Coord",
    "Direction",
    "DistanceField",
    "GoalEdge",
    "Grid",
    "Orientation",
    "PlayerState",
    "RankedPlayer",
    "Ranking",
    "Wall",
    "compute_distances",
    "in_bounds",
    "is_legal",
    "rank_players",
    "turn_order",
    "walls_compatible",
]
