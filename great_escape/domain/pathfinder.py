"""Multi-source shortest-path flood fill toward a goal edge.

Every goal-edge cell is seeded at distance 0 and distances are relaxed
outward breadth-first, skipping blocked edges. A cell's direction is the
step that leads to a neighbor one closer to the goal; when several such
neighbors exist the player's forward direction wins, otherwise the first
one discovered is kept. Each cell is enqueued at most once, so a call is
O(width * height).
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

import numpy as np

from great_escape.config.constants import UNREACHABLE
from great_escape.domain.collision import CollisionMatrix
from great_escape.domain.grid import CARDINALS, Coord, Direction, GoalEdge, Grid
from great_escape.errors import InvariantViolation

__all__ = ["DistanceField", "compute_distances"]


@dataclass(frozen=True)
class DistanceField:
    """Distance and preferred direction for every cell, toward one goal edge.

    ``distance`` and ``direction`` are ``(width, height)`` arrays indexed
    ``[x, y]``. Unreachable cells hold :data:`UNREACHABLE` and
    ``Direction.NONE``.
    """

    grid: Grid
    goal: GoalEdge
    distance: np.ndarray
    direction: np.ndarray

    def distance_at(self, coord: Coord) -> int:
        self.grid.require(coord)
        return int(self.distance[coord.x, coord.y])

    def direction_at(self, coord: Coord) -> Direction:
        self.grid.require(coord)
        return Direction(int(self.direction[coord.x, coord.y]))

    def reachable(self, coord: Coord) -> bool:
        return self.distance_at(coord) != UNREACHABLE

    def path_from(self, start: Coord) -> list[tuple[Coord, Direction]]:
        """Steps (cell, direction) from *start* to the goal edge.

        Returns an empty list when *start* is already on the goal edge or
        cannot reach it.
        """
        if not self.reachable(start):
            return []
        steps: list[tuple[Coord, Direction]] = []
        cell = start
        while self.distance_at(cell) > 0:
            direction = self.direction_at(cell)
            if direction is Direction.NONE:
                raise InvariantViolation(f"reachable cell {cell} has no direction")
            steps.append((cell, direction))
            cell = cell.step(direction)
        return steps

    def dump(self) -> str:
        """Text table of ``distance direction`` pairs, one grid row per line."""
        header = "   |" + "|".join(f"{x:^6}" for x in range(self.grid.width)) + "|"
        lines = [header]
        for y in range(self.grid.height):
            cells = []
            for x in range(self.grid.width):
                dist = int(self.distance[x, y])
                label = "--" if dist == UNREACHABLE else str(dist)
                arrow = _ARROWS[Direction(int(self.direction[x, y]))]
                cells.append(f"{label:>3} {arrow} ")
            lines.append(f"{y:>2} |" + "|".join(cells) + "|")
        return "\n".join(lines)


_ARROWS: dict[Direction, str] = {
    Direction.NONE: ".",
    Direction.RIGHT: ">",
    Direction.LEFT: "<",
    Direction.DOWN: "v",
    Direction.UP: "^",
}


def compute_distances(goal: GoalEdge, collision: CollisionMatrix) -> DistanceField:
    """Flood-fill distances from *goal* across the open edges of *collision*."""
    grid = collision.grid
    forward = goal.forward
    distance = np.full((grid.width, grid.height), UNREACHABLE, dtype=np.int64)
    direction = np.zeros((grid.width, grid.height), dtype=np.int8)

    queue: deque[Coord] = deque()
    for cell in goal.cells(grid):
        distance[cell.x, cell.y] = 0
        queue.append(cell)

    while queue:
        cell = queue.popleft()
        next_distance = int(distance[cell.x, cell.y]) + 1
        for outward in CARDINALS:
            if collision.is_blocked(cell, outward):
                continue
            neighbor = cell.step(outward)
            if not grid.contains(neighbor):
                continue
            # The neighbor reaches `cell` by stepping back the other way.
            inward = outward.opposite
            known = int(distance[neighbor.x, neighbor.y])
            if next_distance < known:
                distance[neighbor.x, neighbor.y] = next_distance
                direction[neighbor.x, neighbor.y] = int(inward)
                queue.append(neighbor)
            elif next_distance == known and inward is forward:
                direction[neighbor.x, neighbor.y] = int(inward)

    return DistanceField(grid=grid, goal=goal, distance=distance, direction=direction)
