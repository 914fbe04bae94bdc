"""Board geometry: coordinates, directions, orientations, walls and goal edges.

Neighbor accessors on :class:`Coord` are pure arithmetic and never check
bounds; callers test :meth:`Grid.contains` before indexing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, Iterator

from great_escape.errors import GridBoundsError, InvariantViolation

__all__ = [
    "CARDINALS",
    "Coord",
    "Direction",
    "GoalEdge",
    "Grid",
    "Orientation",
    "Wall",
]


class Direction(IntEnum):
    """Single-step movement; ``NONE`` marks "no path" or "not computed"."""

    NONE = 0
    RIGHT = 1
    LEFT = 2
    DOWN = 3
    UP = 4

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @property
    def delta(self) -> tuple[int, int]:
        """(dx, dy) of one step; y grows downward."""
        if self is Direction.NONE:
            raise InvariantViolation("Direction.NONE has no step delta")
        return _DELTAS[self]


_OPPOSITES: dict[Direction, Direction] = {
    Direction.NONE: Direction.NONE,
    Direction.RIGHT: Direction.LEFT,
    Direction.LEFT: Direction.RIGHT,
    Direction.DOWN: Direction.UP,
    Direction.UP: Direction.DOWN,
}

_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.RIGHT: (1, 0),
    Direction.LEFT: (-1, 0),
    Direction.DOWN: (0, 1),
    Direction.UP: (0, -1),
}

CARDINALS: tuple[Direction, ...] = (Direction.RIGHT, Direction.LEFT, Direction.DOWN, Direction.UP)
"""The four real directions in their canonical order."""


class Orientation(Enum):
    """Wall orientation, valued by its protocol character."""

    HORIZONTAL = "H"
    VERTICAL = "V"


@dataclass(frozen=True, order=True)
class Coord:
    """Integer cell coordinate; x is the column, y the row (0 at the top)."""

    x: int
    y: int

    def step(self, direction: Direction) -> Coord:
        dx, dy = direction.delta
        return Coord(self.x + dx, self.y + dy)

    @property
    def right(self) -> Coord:
        return Coord(self.x + 1, self.y)

    @property
    def left(self) -> Coord:
        return Coord(self.x - 1, self.y)

    @property
    def down(self) -> Coord:
        return Coord(self.x, self.y + 1)

    @property
    def up(self) -> Coord:
        return Coord(self.x, self.y - 1)

    @property
    def up_right(self) -> Coord:
        return Coord(self.x + 1, self.y - 1)

    @property
    def up_left(self) -> Coord:
        return Coord(self.x - 1, self.y - 1)

    @property
    def down_right(self) -> Coord:
        return Coord(self.x + 1, self.y + 1)

    @property
    def down_left(self) -> Coord:
        return Coord(self.x - 1, self.y + 1)


@dataclass(frozen=True)
class Wall:
    """Two-cell wall segment anchored at its upper-left corner cell.

    A horizontal wall at (x, y) lies along the top edge of (x, y) and
    (x+1, y). A vertical wall at (x, y) lies along the left edge of
    (x, y) and (x, y+1).
    """

    anchor: Coord
    orientation: Orientation

    @classmethod
    def horizontal(cls, x: int, y: int) -> Wall:
        return cls(Coord(x, y), Orientation.HORIZONTAL)

    @classmethod
    def vertical(cls, x: int, y: int) -> Wall:
        return cls(Coord(x, y), Orientation.VERTICAL)

    def __str__(self) -> str:
        return f"{self.anchor.x} {self.anchor.y} {self.orientation.value}"


@dataclass(frozen=True)
class Grid:
    """Immutable board dimensions."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 2 or self.height < 2:
            raise ValueError("grid must be at least 2x2")

    def contains(self, coord: Coord) -> bool:
        return 0 <= coord.x < self.width and 0 <= coord.y < self.height

    def require(self, coord: Coord) -> Coord:
        """Return *coord* unchanged or raise :exc:`GridBoundsError`."""
        if not self.contains(coord):
            raise GridBoundsError(f"{coord} outside {self.width}x{self.height} grid")
        return coord

    def cells(self) -> Iterator[Coord]:
        for y in range(self.height):
            for x in range(self.width):
                yield Coord(x, y)


class GoalEdge(Enum):
    """Board edge a player must reach, named by the player's forward direction."""

    RIGHT = Direction.RIGHT
    LEFT = Direction.LEFT
    DOWN = Direction.DOWN
    UP = Direction.UP

    @classmethod
    def for_player(cls, player_id: int) -> GoalEdge:
        """Goal edge fixed by player id: 0 heads right, 1 left, 2 down."""
        try:
            return _PLAYER_GOALS[player_id]
        except KeyError as exc:
            raise InvariantViolation(f"no goal edge for player id {player_id}") from exc

    @property
    def forward(self) -> Direction:
        return self.value

    def reached(self, coord: Coord, grid: Grid) -> bool:
        return _GOAL_TESTS[self](coord, grid)

    def cells(self, grid: Grid) -> list[Coord]:
        """Cells of the goal edge in ascending row/column order."""
        return [cell for cell in grid.cells() if self.reached(cell, grid)]


_GOAL_TESTS: dict[GoalEdge, Callable[[Coord, Grid], bool]] = {
    GoalEdge.RIGHT: lambda coord, grid: coord.x == grid.width - 1,
    GoalEdge.LEFT: lambda coord, grid: coord.x == 0,
    GoalEdge.DOWN: lambda coord, grid: coord.y == grid.height - 1,
    GoalEdge.UP: lambda coord, grid: coord.y == 0,
}

_PLAYER_GOALS: dict[int, GoalEdge] = {
    0: GoalEdge.RIGHT,
    1: GoalEdge.LEFT,
    2: GoalEdge.DOWN,
}
