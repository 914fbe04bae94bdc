"""Tests for great_escape.domain.grid."""

from __future__ import annotations

import pytest

from great_escape.domain.grid import CARDINALS, Coord, Direction, GoalEdge, Grid, Wall
from great_escape.errors import GridBoundsError, InvariantViolation


class TestCoord:
    def test_cardinal_neighbors(self) -> None:
        c = Coord(3, 3)
        assert (c.right, c.left, c.down, c.up) == (
            Coord(4, 3),
            Coord(2, 3),
            Coord(3, 4),
            Coord(3, 2),
        )

    def test_diagonal_neighbors(self) -> None:
        c = Coord(3, 3)
        assert c.up_right == Coord(4, 2)
        assert c.up_left == Coord(2, 2)
        assert c.down_right == Coord(4, 4)
        assert c.down_left == Coord(2, 4)

    def test_neighbors_are_not_bounds_checked(self) -> None:
        assert Coord(0, 0).up_left == Coord(-1, -1)

    def test_step_matches_named_neighbor(self) -> None:
        c = Coord(5, 2)
        assert c.step(Direction.RIGHT) == c.right
        assert c.step(Direction.UP) == c.up


class TestDirection:
    def test_opposites_are_involutive(self) -> None:
        for direction in CARDINALS:
            assert direction.opposite.opposite is direction
            assert direction.opposite is not direction

    def test_none_has_no_delta(self) -> None:
        with pytest.raises(InvariantViolation):
            _ = Direction.NONE.delta


class TestGrid:
    def test_contains(self) -> None:
        grid = Grid(9, 9)
        assert grid.contains(Coord(8, 8))
        assert not grid.contains(Coord(9, 0))
        assert not grid.contains(Coord(0, -1))

    def test_require_raises_outside(self) -> None:
        with pytest.raises(GridBoundsError):
            Grid(9, 9).require(Coord(-1, 0))

    def test_cells_cover_board(self) -> None:
        assert len(list(Grid(4, 3).cells())) == 12


class TestGoalEdge:
    def test_player_goals(self) -> None:
        assert GoalEdge.for_player(0) is GoalEdge.RIGHT
        assert GoalEdge.for_player(1) is GoalEdge.LEFT
        assert GoalEdge.for_player(2) is GoalEdge.DOWN

    def test_unknown_player_is_fatal(self) -> None:
        with pytest.raises(InvariantViolation):
            GoalEdge.for_player(3)

    def test_forward_direction(self) -> None:
        assert GoalEdge.UP.forward is Direction.UP
        assert GoalEdge.RIGHT.forward is Direction.RIGHT

    def test_goal_cells_and_reached(self) -> None:
        grid = Grid(9, 7)
        cells = GoalEdge.DOWN.cells(grid)
        assert len(cells) == 9
        assert all(GoalEdge.DOWN.reached(c, grid) for c in cells)
        assert not GoalEdge.DOWN.reached(Coord(0, 5), grid)
        assert GoalEdge.LEFT.cells(grid)[0] == Coord(0, 0)

    @pytest.mark.parametrize(
        ("edge", "expected_first", "expected_last"),
        [
            (GoalEdge.RIGHT, Coord(8, 0), Coord(8, 6)),
            (GoalEdge.LEFT, Coord(0, 0), Coord(0, 6)),
            (GoalEdge.DOWN, Coord(0, 6), Coord(8, 6)),
            (GoalEdge.UP, Coord(0, 0), Coord(8, 0)),
        ],
    )
    def test_every_edge_has_its_own_cells(
        self, edge: GoalEdge, expected_first: Coord, expected_last: Coord
    ) -> None:
        grid = Grid(9, 7)
        cells = edge.cells(grid)
        assert (cells[0], cells[-1]) == (expected_first, expected_last)
        others = set(GoalEdge) - {edge}
        assert all(set(other.cells(grid)) != set(cells) for other in others)


def test_wall_text_form() -> None:
    assert str(Wall.horizontal(3, 4)) == "3 4 H"
    assert str(Wall.vertical(0, 7)) == "0 7 V"
