"""Typed per-turn snapshot of the board as reported by the game engine."""

from __future__ import annotations

from dataclasses import dataclass

from great_escape.domain.collision import CollisionMatrix
from great_escape.domain.grid import Coord, GoalEdge, Grid, Wall

__all__ = ["BoardSnapshot", "PlayerState"]


@dataclass(frozen=True)
class PlayerState:
    """One player's reported state; ``position`` is ``None`` once eliminated."""

    player_id: int
    position: Coord | None
    walls_left: int

    @property
    def alive(self) -> bool:
        return self.position is not None

    @property
    def goal(self) -> GoalEdge:
        return GoalEdge.for_player(self.player_id)


@dataclass(frozen=True)
class BoardSnapshot:
    """Everything the engine needs to decide one turn."""

    grid: Grid
    my_id: int
    players: tuple[PlayerState, ...]
    walls: tuple[Wall, ...] = ()

    def __post_init__(self) -> None:
        if not 0 <= self.my_id < len(self.players):
            raise ValueError("my_id must index into players")
        for index, player in enumerate(self.players):
            if player.player_id != index:
                raise ValueError("players must be ordered by player_id")
            if player.position is not None:
                self.grid.require(player.position)

    @property
    def player_count(self) -> int:
        return len(self.players)

    @property
    def me(self) -> PlayerState:
        return self.players[self.my_id]

    def alive_players(self) -> list[PlayerState]:
        return [player for player in self.players if player.alive]

    def alive_positions(self) -> dict[int, Coord]:
        """Player id to position for every player still on the board."""
        return {
            player.player_id: player.position
            for player in self.players
            if player.position is not None
        }

    def build_collision_matrix(self) -> CollisionMatrix:
        """Fresh collision matrix holding every wall of this snapshot."""
        return CollisionMatrix.from_walls(self.grid, self.walls)
