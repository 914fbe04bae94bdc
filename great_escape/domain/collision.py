"""Per-cell record of which movement edges are blocked by walls.

The matrix is a ``(width, height, 4)`` boolean array, one flag per
cardinal direction. Every wall blocks both half-edges of each crossing,
so the matrix stays symmetric: if (x, y) is blocked to the right then
(x+1, y) is blocked to the left.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager

import numpy as np

from great_escape.domain.grid import Coord, Direction, Grid, Orientation, Wall

__all__ = ["CollisionMatrix"]


def _edge_index(direction: Direction) -> int:
    return int(direction) - 1


def _footprint(wall: Wall) -> tuple[tuple[Coord, Direction], ...]:
    """The four (cell, direction) half-edges a wall blocks."""
    a = wall.anchor
    if wall.orientation is Orientation.HORIZONTAL:
        return (
            (a.up, Direction.DOWN),
            (a.up_right, Direction.DOWN),
            (a, Direction.UP),
            (a.right, Direction.UP),
        )
    return (
        (a.left, Direction.RIGHT),
        (a.down_left, Direction.RIGHT),
        (a, Direction.LEFT),
        (a.down, Direction.LEFT),
    )


class CollisionMatrix:
    """Blocked-edge flags for every cell of a grid."""

    def __init__(self, grid: Grid) -> None:
        self.grid = grid
        self._blocked = np.zeros((grid.width, grid.height, 4), dtype=bool)

    @classmethod
    def from_walls(cls, grid: Grid, walls: Iterable[Wall]) -> CollisionMatrix:
        """Build a fresh matrix with every wall in *walls* applied."""
        matrix = cls(grid)
        for wall in walls:
            matrix.apply(wall)
        return matrix

    def copy(self) -> CollisionMatrix:
        clone = CollisionMatrix(self.grid)
        clone._blocked = self._blocked.copy()
        return clone

    def is_blocked(self, coord: Coord, direction: Direction) -> bool:
        self.grid.require(coord)
        return bool(self._blocked[coord.x, coord.y, _edge_index(direction)])

    def can_move(self, coord: Coord, direction: Direction) -> bool:
        """True if one step from *coord* stays on the board and crosses no wall."""
        if self.is_blocked(coord, direction):
            return False
        return self.grid.contains(coord.step(direction))

    def _set(self, coord: Coord, direction: Direction, blocked: bool) -> None:
        self.grid.require(coord)
        self._blocked[coord.x, coord.y, _edge_index(direction)] = blocked

    def set_edge(self, wall: Wall, blocked: bool) -> None:
        """Mark (or clear) the four half-edges touched by *wall*.

        The wall must already be legal; an anchor whose footprint leaves
        the board raises :exc:`GridBoundsError` before any flag changes.
        """
        footprint = _footprint(wall)
        for coord, _ in footprint:
            self.grid.require(coord)
        for coord, direction in footprint:
            self._set(coord, direction, blocked)

    def apply(self, wall: Wall) -> None:
        self.set_edge(wall, True)

    def revert(self, wall: Wall) -> None:
        self.set_edge(wall, False)

    @contextmanager
    def tentative(self, wall: Wall) -> Iterator[CollisionMatrix]:
        """Apply *wall* for the duration of the block and always revert it."""
        self.apply(wall)
        try:
            yield self
        finally:
            self.revert(wall)

    def blocked_edges(self) -> set[tuple[Coord, Direction]]:
        """All blocked (cell, direction) half-edges, for inspection and tests."""
        xs, ys, ds = np.nonzero(self._blocked)
        return {
            (Coord(int(x), int(y)), Direction(int(d) + 1)) for x, y, d in zip(xs, ys, ds)
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CollisionMatrix):
            return NotImplemented
        return self.grid == other.grid and bool(np.array_equal(self._blocked, other._blocked))

    __hash__ = None  # type: ignore[assignment]
