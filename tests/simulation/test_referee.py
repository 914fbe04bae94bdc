"""Tests for great_escape.simulation.referee."""

from __future__ import annotations

from random import Random

import pytest

from great_escape.config.types import MatchConfig
from great_escape.domain.collision import CollisionMatrix
from great_escape.domain.grid import Coord, Direction, Grid, Wall
from great_escape.engine.policy import MoveAction, PlaceWallAction
from great_escape.simulation.referee import PlayerStatus, Referee, open_edge_graph


def _referee(player_count: int = 2, walls_per_player: int | None = None) -> Referee:
    config = MatchConfig(player_count=player_count, seed=11, walls_per_player=walls_per_player)
    return Referee(config, Random(config.seed))


def test_open_edge_graph_on_empty_board() -> None:
    graph = open_edge_graph(CollisionMatrix(Grid(9, 9)))
    assert graph.number_of_nodes() == 81
    assert graph.number_of_edges() == 144


def test_open_edge_graph_drops_walled_edges() -> None:
    collision = CollisionMatrix.from_walls(Grid(9, 9), [Wall.vertical(4, 4)])
    graph = open_edge_graph(collision)
    assert graph.number_of_edges() == 142
    assert not graph.has_edge(Coord(3, 4), Coord(4, 4))
    assert not graph.has_edge(Coord(3, 5), Coord(4, 5))


class TestSetup:
    def test_start_positions_on_opposite_edges(self) -> None:
        referee = _referee(player_count=3)
        p0, p1, p2 = referee.players
        assert p0.position.x == 0
        assert p1.position.x == 8
        assert p2.position.y == 0

    def test_wall_stock_depends_on_player_count(self) -> None:
        assert {p.walls_left for p in _referee(2).players} == {10}
        assert {p.walls_left for p in _referee(3).players} == {6}
        assert {p.walls_left for p in _referee(2, walls_per_player=1).players} == {1}


class TestMoves:
    def test_move_updates_position(self) -> None:
        referee = _referee()
        referee.players[0].position = Coord(3, 3)
        assert referee.apply(0, MoveAction(Direction.UP))
        assert referee.players[0].position == Coord(3, 2)

    def test_reaching_goal_finishes_match(self) -> None:
        referee = _referee()
        referee.players[0].position = Coord(7, 4)
        assert referee.apply(0, MoveAction(Direction.RIGHT))
        assert referee.players[0].status is PlayerStatus.FINISHED
        assert referee.finish_order == [0]
        assert referee.is_over()

    def test_move_off_board_eliminates(self) -> None:
        referee = _referee()
        referee.players[0].position = Coord(0, 4)
        assert not referee.apply(0, MoveAction(Direction.LEFT))
        assert referee.players[0].status is PlayerStatus.ELIMINATED
        assert referee.eliminated == [0]

    def test_move_through_wall_eliminates(self) -> None:
        referee = _referee()
        referee.players[0].position = Coord(3, 4)
        assert referee.apply(1, PlaceWallAction(Wall.vertical(4, 4)))
        assert not referee.apply(0, MoveAction(Direction.RIGHT))
        assert not referee.is_playing(0)

    def test_inactive_player_cannot_act(self) -> None:
        referee = _referee()
        referee.players[0].status = PlayerStatus.ELIMINATED
        with pytest.raises(ValueError):
            referee.apply(0, MoveAction(Direction.RIGHT))


class TestWalls:
    def test_wall_is_recorded(self) -> None:
        referee = _referee()
        assert referee.apply(0, PlaceWallAction(Wall.horizontal(2, 5)))
        assert referee.walls == [Wall.horizontal(2, 5)]
        assert referee.players[0].walls_left == 9
        assert not referee.collision.can_move(Coord(2, 4), Direction.DOWN)

    def test_overlapping_wall_eliminates(self) -> None:
        referee = _referee(player_count=3)
        assert referee.apply(0, PlaceWallAction(Wall.horizontal(2, 5)))
        assert not referee.apply(1, PlaceWallAction(Wall.horizontal(3, 5)))
        assert referee.eliminated == [1]
        assert referee.walls == [Wall.horizontal(2, 5)]

    def test_disconnecting_wall_eliminates(self) -> None:
        referee = _referee()
        referee.players[0].position = Coord(0, 0)
        assert referee.apply(1, PlaceWallAction(Wall.horizontal(0, 1)))
        assert not referee.apply(0, PlaceWallAction(Wall.vertical(2, 0)))
        assert referee.walls == [Wall.horizontal(0, 1)]
        assert referee.collision.can_move(Coord(1, 0), Direction.RIGHT)

    def test_no_walls_left_eliminates(self) -> None:
        referee = _referee(walls_per_player=0)
        assert not referee.apply(0, PlaceWallAction(Wall.horizontal(2, 5)))
        assert referee.eliminated == [0]

    def test_snapshot_hides_inactive_players(self) -> None:
        referee = _referee(player_count=3)
        referee.apply(2, MoveAction(Direction.UP))
        snapshot = referee.snapshot_for(0)
        assert snapshot.players[2].position is None
        assert snapshot.players[0].position == referee.players[0].position
