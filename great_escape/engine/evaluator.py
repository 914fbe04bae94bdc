"""Wall impact evaluation and best-wall selection.

A candidate wall is applied to the shared collision matrix, every alive
player's distance is recomputed, and the wall is reverted before the
result is returned. Candidates come only from the two wall placements
that would block each step of the leader's current shortest path.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from great_escape.config.constants import UNREACHABLE
from great_escape.config.types import ScoringWeights
from great_escape.domain.board import BoardSnapshot
from great_escape.domain.collision import CollisionMatrix
from great_escape.domain.grid import Coord, Direction, GoalEdge, Wall
from great_escape.domain.legality import is_legal
from great_escape.domain.pathfinder import DistanceField, compute_distances
from great_escape.errors import InvariantViolation

__all__ = [
    "REJECT_DISCONNECTS",
    "REJECT_ILLEGAL",
    "WallEvaluation",
    "WallSearch",
    "blocking_walls",
    "candidate_walls",
    "evaluate_wall",
    "select_best_wall",
]

REJECT_ILLEGAL = "illegal"
REJECT_DISCONNECTS = "disconnects"


@dataclass(frozen=True)
class WallEvaluation:
    """Distance deltas a wall would cause; ``valid`` is False for rejected walls."""

    wall: Wall
    valid: bool
    impact_on_leader: int = 0
    impact_on_self: int = 0
    impact_on_other: int = 0
    score: int = 0
    rejected_because: str | None = None


@dataclass(frozen=True)
class WallSearch:
    """Outcome of scanning the candidate walls of one turn."""

    best: WallEvaluation | None
    candidates: int
    evaluated: int
    timed_out: bool


def blocking_walls(cell: Coord, direction: Direction) -> tuple[Wall, Wall]:
    """The two walls that would block the step from *cell* toward *direction*."""
    x, y = cell.x, cell.y
    if direction is Direction.RIGHT:
        return Wall.vertical(x + 1, y), Wall.vertical(x + 1, y - 1)
    if direction is Direction.LEFT:
        return Wall.vertical(x, y), Wall.vertical(x, y - 1)
    if direction is Direction.DOWN:
        return Wall.horizontal(x, y + 1), Wall.horizontal(x - 1, y + 1)
    if direction is Direction.UP:
        return Wall.horizontal(x, y), Wall.horizontal(x - 1, y)
    raise InvariantViolation(f"no wall blocks direction {direction!r}")


def candidate_walls(field: DistanceField, start: Coord) -> list[Wall]:
    """Walls blocking each step of the path from *start*, goal end first.

    The last candidates listed are those nearest to *start*. A wall that
    blocks several steps keeps the position of the step nearest *start*.
    Bounds are not checked here.
    """
    walls: dict[Wall, None] = {}
    for cell, direction in reversed(field.path_from(start)):
        for wall in blocking_walls(cell, direction):
            walls.pop(wall, None)
            walls[wall] = None
    return list(walls)


def evaluate_wall(
    candidate: Wall,
    snapshot: BoardSnapshot,
    collision: CollisionMatrix,
    baseline: Mapping[int, int],
    leader_id: int,
    weights: ScoringWeights,
) -> WallEvaluation:
    """Score *candidate* against the distances in *baseline*.

    *baseline* maps every alive player id to its distance before the wall.
    The collision matrix is left exactly as it was found.
    """
    if not is_legal(snapshot.walls, snapshot.grid, candidate):
        return WallEvaluation(wall=candidate, valid=False, rejected_because=REJECT_ILLEGAL)

    deltas: dict[int, int] = {}
    with collision.tentative(candidate):
        for player_id, position in snapshot.alive_positions().items():
            field = compute_distances(GoalEdge.for_player(player_id), collision)
            distance = field.distance_at(position)
            if distance == UNREACHABLE:
                return WallEvaluation(
                    wall=candidate, valid=False, rejected_because=REJECT_DISCONNECTS
                )
            deltas[player_id] = distance - baseline[player_id]

    my_id = snapshot.my_id
    on_leader = deltas.get(leader_id, 0)
    on_self = deltas.get(my_id, 0)
    on_other = sum(
        delta for player_id, delta in deltas.items() if player_id not in (leader_id, my_id)
    )
    return WallEvaluation(
        wall=candidate,
        valid=True,
        impact_on_leader=on_leader,
        impact_on_self=on_self,
        impact_on_other=on_other,
        score=weights.score(on_leader, on_self, on_other),
    )


def select_best_wall(
    snapshot: BoardSnapshot,
    collision: CollisionMatrix,
    fields: Mapping[int, DistanceField],
    leader_id: int,
    weights: ScoringWeights,
    deadline: float | None = None,
    clock: Callable[[], float] = time.perf_counter,
) -> WallSearch:
    """Evaluate the walls along the leader's path and keep the best one.

    Only valid walls that lengthen the leader's path qualify. Equal scores go
    to the candidate found later, i.e. nearer the leader. Scanning stops
    once *deadline* (on *clock*) has passed.
    """
    leader = snapshot.players[leader_id]
    if leader.position is None:
        raise InvariantViolation(f"leader {leader_id} is not on the board")

    baseline = {
        player_id: fields[player_id].distance_at(position)
        for player_id, position in snapshot.alive_positions().items()
    }
    candidates = candidate_walls(fields[leader_id], leader.position)

    best: WallEvaluation | None = None
    evaluated = 0
    timed_out = False
    for candidate in candidates:
        if deadline is not None and clock() > deadline:
            timed_out = True
            break
        evaluation = evaluate_wall(candidate, snapshot, collision, baseline, leader_id, weights)
        evaluated += 1
        if not evaluation.valid or evaluation.impact_on_leader <= 0:
            continue
        if best is None or evaluation.score >= best.score:
            best = evaluation

    return WallSearch(
        best=best, candidates=len(candidates), evaluated=evaluated, timed_out=timed_out
    )
