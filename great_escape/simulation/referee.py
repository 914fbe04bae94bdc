"""Authoritative board keeper for local self-play matches.

The referee validates every action independently of the bot's own
pathfinder: wall connectivity is checked on a ``networkx`` graph of the
open edges.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from random import Random

import networkx as nx

from great_escape.config.types import MatchConfig
from great_escape.domain.board import BoardSnapshot, PlayerState
from great_escape.domain.collision import CollisionMatrix
from great_escape.domain.grid import Coord, Direction, GoalEdge, Grid, Wall
from great_escape.domain.legality import is_legal
from great_escape.engine.policy import Action, MoveAction, PlaceWallAction

__all__ = ["PlayerStatus", "Referee", "RefereePlayer", "open_edge_graph"]


class PlayerStatus(Enum):
    PLAYING = "playing"
    FINISHED = "finished"
    ELIMINATED = "eliminated"


@dataclass
class RefereePlayer:
    player_id: int
    position: Coord
    walls_left: int
    status: PlayerStatus = PlayerStatus.PLAYING

    @property
    def goal(self) -> GoalEdge:
        return GoalEdge.for_player(self.player_id)


def open_edge_graph(collision: CollisionMatrix) -> nx.Graph:
    """Undirected graph of cells joined by every edge no wall blocks."""
    grid = collision.grid
    graph = nx.Graph()
    for cell in grid.cells():
        graph.add_node(cell)
        for direction in (Direction.RIGHT, Direction.DOWN):
            if collision.can_move(cell, direction):
                graph.add_edge(cell, cell.step(direction))
    return graph


def _start_position(player_id: int, grid: Grid, rng: Random) -> Coord:
    if player_id == 0:
        return Coord(0, rng.randrange(grid.height))
    if player_id == 1:
        return Coord(grid.width - 1, rng.randrange(grid.height))
    return Coord(rng.randrange(grid.width), 0)


class Referee:
    """Applies actions to the shared board and tracks who is still playing."""

    def __init__(self, config: MatchConfig, rng: Random) -> None:
        self.grid = Grid(config.width, config.height)
        self.walls: list[Wall] = []
        self.collision = CollisionMatrix(self.grid)
        self.players = [
            RefereePlayer(
                player_id=player_id,
                position=_start_position(player_id, self.grid, rng),
                walls_left=config.wall_stock,
            )
            for player_id in range(config.player_count)
        ]
        self.finish_order: list[int] = []
        self.eliminated: list[int] = []

    def playing_ids(self) -> list[int]:
        return [p.player_id for p in self.players if p.status is PlayerStatus.PLAYING]

    def is_playing(self, player_id: int) -> bool:
        return self.players[player_id].status is PlayerStatus.PLAYING

    def is_over(self) -> bool:
        return len(self.playing_ids()) <= 1

    def snapshot_for(self, player_id: int) -> BoardSnapshot:
        """Board as the engine reports it to *player_id*; inactive players are off-board."""
        players = tuple(
            PlayerState(
                player_id=p.player_id,
                position=p.position if p.status is PlayerStatus.PLAYING else None,
                walls_left=p.walls_left,
            )
            for p in self.players
        )
        return BoardSnapshot(
            grid=self.grid, my_id=player_id, players=players, walls=tuple(self.walls)
        )

    def all_connected(self, collision: CollisionMatrix) -> bool:
        """True if every playing player can still reach its goal edge."""
        graph = open_edge_graph(collision)
        for player in self.players:
            if player.status is not PlayerStatus.PLAYING:
                continue
            goal_node = ("goal", player.player_id)
            graph.add_edges_from((goal_node, cell) for cell in player.goal.cells(self.grid))
            if not nx.has_path(graph, player.position, goal_node):
                return False
        return True

    def apply(self, player_id: int, action: Action) -> bool:
        """Apply *action*; an invalid action eliminates the player. Returns validity."""
        player = self.players[player_id]
        if player.status is not PlayerStatus.PLAYING:
            raise ValueError(f"player {player_id} is not playing")

        if isinstance(action, MoveAction):
            valid = self._move(player, action.direction)
        elif isinstance(action, PlaceWallAction):
            valid = self._place_wall(player, action.wall)
        else:
            raise TypeError(f"unsupported action type: {type(action).__name__}")

        if not valid:
            player.status = PlayerStatus.ELIMINATED
            self.eliminated.append(player_id)
        return valid

    def _move(self, player: RefereePlayer, direction: Direction) -> bool:
        if not self.collision.can_move(player.position, direction):
            return False
        player.position = player.position.step(direction)
        if player.goal.reached(player.position, self.grid):
            player.status = PlayerStatus.FINISHED
            self.finish_order.append(player.player_id)
        return True

    def _place_wall(self, player: RefereePlayer, wall: Wall) -> bool:
        if player.walls_left <= 0:
            return False
        if not is_legal(self.walls, self.grid, wall):
            return False
        trial = self.collision.copy()
        trial.apply(wall)
        if not self.all_connected(trial):
            return False
        self.collision = trial
        self.walls.append(wall)
        player.walls_left -= 1
        return True
