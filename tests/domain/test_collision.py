"""Tests for great_escape.domain.collision."""

from __future__ import annotations

import pytest

from great_escape.domain.collision import CollisionMatrix
from great_escape.domain.grid import Coord, Direction, Grid, Wall
from great_escape.errors import GridBoundsError

GRID = Grid(9, 9)


class TestSetEdge:
    def test_horizontal_wall_blocks_exactly_four_half_edges(self) -> None:
        matrix = CollisionMatrix(GRID)
        matrix.apply(Wall.horizontal(3, 3))
        assert matrix.blocked_edges() == {
            (Coord(3, 2), Direction.DOWN),
            (Coord(4, 2), Direction.DOWN),
            (Coord(3, 3), Direction.UP),
            (Coord(4, 3), Direction.UP),
        }

    def test_vertical_wall_blocks_exactly_four_half_edges(self) -> None:
        matrix = CollisionMatrix(GRID)
        matrix.apply(Wall.vertical(1, 1))
        assert matrix.blocked_edges() == {
            (Coord(0, 1), Direction.RIGHT),
            (Coord(0, 2), Direction.RIGHT),
            (Coord(1, 1), Direction.LEFT),
            (Coord(1, 2), Direction.LEFT),
        }

    def test_blocking_is_symmetric(self) -> None:
        matrix = CollisionMatrix.from_walls(
            GRID, [Wall.horizontal(0, 5), Wall.vertical(7, 2), Wall.horizontal(4, 8)]
        )
        for cell, direction in matrix.blocked_edges():
            assert matrix.is_blocked(cell.step(direction), direction.opposite)

    def test_revert_restores_empty_matrix(self) -> None:
        matrix = CollisionMatrix(GRID)
        wall = Wall.vertical(4, 4)
        matrix.apply(wall)
        matrix.revert(wall)
        assert matrix == CollisionMatrix(GRID)

    def test_revert_keeps_other_walls(self) -> None:
        kept = Wall.horizontal(2, 2)
        matrix = CollisionMatrix.from_walls(GRID, [kept])
        expected = matrix.copy()
        tried = Wall.vertical(6, 6)
        matrix.apply(tried)
        matrix.revert(tried)
        assert matrix == expected

    def test_wall_off_the_board_raises(self) -> None:
        with pytest.raises(GridBoundsError):
            CollisionMatrix(GRID).apply(Wall.horizontal(0, 0))


class TestTentative:
    def test_wall_active_inside_block_only(self) -> None:
        matrix = CollisionMatrix(GRID)
        wall = Wall.horizontal(3, 3)
        with matrix.tentative(wall):
            assert matrix.is_blocked(Coord(3, 3), Direction.UP)
        assert not matrix.is_blocked(Coord(3, 3), Direction.UP)

    def test_off_board_wall_leaves_matrix_untouched(self) -> None:
        matrix = CollisionMatrix(GRID)
        with pytest.raises(GridBoundsError):
            with matrix.tentative(Wall.horizontal(8, 4)):
                pass
        assert matrix.blocked_edges() == set()

    def test_reverts_when_block_raises(self) -> None:
        matrix = CollisionMatrix(GRID)
        with pytest.raises(RuntimeError):
            with matrix.tentative(Wall.vertical(2, 2)):
                raise RuntimeError("boom")
        assert matrix == CollisionMatrix(GRID)


class TestQueries:
    def test_can_move_respects_border(self) -> None:
        matrix = CollisionMatrix(GRID)
        assert not matrix.can_move(Coord(0, 0), Direction.LEFT)
        assert not matrix.can_move(Coord(8, 8), Direction.DOWN)
        assert matrix.can_move(Coord(0, 0), Direction.RIGHT)

    def test_can_move_respects_walls(self) -> None:
        matrix = CollisionMatrix.from_walls(GRID, [Wall.vertical(1, 1)])
        assert not matrix.can_move(Coord(0, 1), Direction.RIGHT)
        assert not matrix.can_move(Coord(1, 2), Direction.LEFT)
        assert matrix.can_move(Coord(0, 3), Direction.RIGHT)

    def test_out_of_bounds_lookup_raises(self) -> None:
        with pytest.raises(GridBoundsError):
            CollisionMatrix(GRID).is_blocked(Coord(9, 0), Direction.UP)

    def test_copy_is_independent(self) -> None:
        matrix = CollisionMatrix(GRID)
        clone = matrix.copy()
        clone.apply(Wall.horizontal(1, 1))
        assert matrix == CollisionMatrix(GRID)
        assert clone != matrix
