"""Cheap wall legality checks: board bounds and pairwise compatibility.

No grid traversal happens here; disconnection is the evaluator's job.
"""

from __future__ import annotations

from collections.abc import Iterable

from great_escape.domain.grid import Grid, Orientation, Wall

__all__ = ["in_bounds", "is_legal", "walls_compatible"]


def in_bounds(grid: Grid, wall: Wall) -> bool:
    """True if the wall's whole span lies inside the board and off its border.

    A wall may not lie on the outer border along its own axis and may not
    run past the far edge.
    """
    x, y = wall.anchor.x, wall.anchor.y
    if wall.orientation is Orientation.HORIZONTAL:
        return 0 < y <= grid.height - 1 and 0 <= x < grid.width - 1
    return 0 < x <= grid.width - 1 and 0 <= y < grid.height - 1


def walls_compatible(first: Wall, second: Wall) -> bool:
    """True if the two walls neither overlap nor cross. Order-independent."""
    if first.orientation is second.orientation:
        a, b = first.anchor, second.anchor
        if first.orientation is Orientation.HORIZONTAL:
            return not (a.y == b.y and abs(a.x - b.x) <= 1)
        return not (a.x == b.x and abs(a.y - b.y) <= 1)

    if first.orientation is Orientation.HORIZONTAL:
        horizontal, vertical = first, second
    else:
        horizontal, vertical = second, first
    if horizontal.anchor.up_right == vertical.anchor:
        return False
    # Walls sharing an anchor corner are rejected as well.
    return horizontal.anchor != vertical.anchor


def is_legal(existing: Iterable[Wall], grid: Grid, candidate: Wall) -> bool:
    """Bounds check followed by a compatibility check against every placed wall."""
    if not in_bounds(grid, candidate):
        return False
    return all(walls_compatible(wall, candidate) for wall in existing)
