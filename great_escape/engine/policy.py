"""Per-turn decision policy: move along the shortest path or place a wall.

The policy is a pure function of the board snapshot and a small
:class:`TurnState` carried from the previous turn; it returns the action
together with the next state.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Union

from great_escape.config.constants import UNREACHABLE
from great_escape.config.types import PolicyConfig
from great_escape.domain.board import BoardSnapshot
from great_escape.domain.grid import Direction, Wall
from great_escape.domain.pathfinder import DistanceField, compute_distances
from great_escape.domain.ranking import Ranking, rank_players
from great_escape.engine.evaluator import WallSearch, select_best_wall
from great_escape.errors import InvariantViolation

__all__ = [
    "Action",
    "Decision",
    "MoveAction",
    "PlaceWallAction",
    "TurnState",
    "compute_fields",
    "decide",
    "should_attempt_walls",
]


@dataclass(frozen=True)
class TurnState:
    """State carried across turns: the turn counter and the sticky wall flag."""

    turn: int = 0
    commit_to_walls: bool = False


@dataclass(frozen=True)
class MoveAction:
    direction: Direction

    def __post_init__(self) -> None:
        if self.direction is Direction.NONE:
            raise InvariantViolation("cannot move in Direction.NONE")


@dataclass(frozen=True)
class PlaceWallAction:
    wall: Wall


Action = Union[MoveAction, PlaceWallAction]


@dataclass(frozen=True)
class Decision:
    """The chosen action plus everything computed on the way to it."""

    action: Action
    state: TurnState
    ranking: Ranking
    fields: dict[int, DistanceField] = field(repr=False)
    search: WallSearch | None = None


def compute_fields(snapshot: BoardSnapshot) -> dict[int, DistanceField]:
    """Distance field of every alive player on a freshly built collision matrix."""
    collision = snapshot.build_collision_matrix()
    return {
        player.player_id: compute_distances(player.goal, collision)
        for player in snapshot.alive_players()
    }


def _distances(snapshot: BoardSnapshot, fields: dict[int, DistanceField]) -> list[int | None]:
    distances: list[int | None] = []
    for player in snapshot.players:
        if player.position is None:
            distances.append(None)
            continue
        distance = fields[player.player_id].distance_at(player.position)
        if distance == UNREACHABLE:
            raise InvariantViolation(f"alive player {player.player_id} cannot reach its goal")
        distances.append(distance)
    return distances


def should_attempt_walls(
    snapshot: BoardSnapshot, ranking: Ranking, state: TurnState, config: PolicyConfig
) -> bool:
    """Gate for the wall search; the caller falls back to a move when False."""
    if snapshot.me.walls_left <= 0:
        return False
    if not ranking.ahead_of_self():
        return False

    leader = ranking.leader
    last = ranking.last_alive
    if leader is None or last is None or leader.distance is None or last.distance is None:
        return False

    pressing = leader.distance < config.leader_distance_threshold or state.commit_to_walls
    affordable = last.player_id == snapshot.my_id or last.distance > config.safety_margin
    return pressing and affordable


def decide(
    snapshot: BoardSnapshot,
    state: TurnState | None = None,
    config: PolicyConfig | None = None,
    clock: Callable[[], float] = time.perf_counter,
) -> Decision:
    """Choose this turn's action for the acting player."""
    state = state or TurnState()
    config = config or PolicyConfig()
    turn = state.turn + 1
    deadline = clock() + config.budget_seconds(turn)

    me = snapshot.me
    if me.position is None:
        raise InvariantViolation(f"player {snapshot.my_id} asked to act while eliminated")

    fields = compute_fields(snapshot)
    ranking = rank_players(_distances(snapshot, fields), snapshot.my_id)

    search: WallSearch | None = None
    if should_attempt_walls(snapshot, ranking, state, config):
        leader = ranking.leader
        if leader is None:
            raise InvariantViolation("wall search requested without a leader")
        search = select_best_wall(
            snapshot,
            snapshot.build_collision_matrix(),
            fields,
            leader.player_id,
            config.weights,
            deadline=deadline,
            clock=clock,
        )
        if search.best is not None:
            return Decision(
                action=PlaceWallAction(search.best.wall),
                state=TurnState(turn=turn, commit_to_walls=config.sticky_walls),
                ranking=ranking,
                fields=fields,
                search=search,
            )

    direction = fields[snapshot.my_id].direction_at(me.position)
    if direction is Direction.NONE:
        raise InvariantViolation(f"no direction recorded at own cell {me.position}")
    return Decision(
        action=MoveAction(direction),
        state=TurnState(turn=turn, commit_to_walls=state.commit_to_walls),
        ranking=ranking,
        fields=fields,
        search=search,
    )
