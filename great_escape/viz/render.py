"""Matplotlib-based rendering of distance fields and decision logs."""

from __future__ import annotations

from pathlib import Path

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
import pyarrow.parquet as pq

from great_escape.config.constants import UNREACHABLE
from great_escape.domain.board import BoardSnapshot
from great_escape.domain.grid import Direction, Orientation, Wall
from great_escape.domain.pathfinder import DistanceField, compute_distances
from great_escape.viz.theme import DEFAULT_THEME, Theme

__all__ = ["render_distance_field", "render_distance_timeline"]


def _wall_segment(wall: Wall) -> tuple[tuple[float, float], tuple[float, float]]:
    """Endpoints of *wall* in image coordinates (cell centers at integers)."""
    x, y = wall.anchor.x - 0.5, wall.anchor.y - 0.5
    if wall.orientation is Orientation.HORIZONTAL:
        return (x, x + 2.0), (y, y)
    return (x, x), (y, y + 2.0)


def _draw_arrows(ax: plt.Axes, field: DistanceField, theme: Theme) -> None:
    xs: list[int] = []
    ys: list[int] = []
    us: list[float] = []
    vs: list[float] = []
    for cell in field.grid.cells():
        direction = field.direction_at(cell)
        if direction is Direction.NONE:
            continue
        dx, dy = direction.delta
        xs.append(cell.x)
        ys.append(cell.y)
        us.append(dx * 0.35)
        vs.append(dy * 0.35)
    if xs:
        ax.quiver(
            xs, ys, us, vs,
            angles="xy", scale_units="xy", scale=1.0,
            color=theme.arrow_color, width=0.006,
        )


def render_distance_field(
    snapshot: BoardSnapshot,
    player_id: int,
    output_path: Path,
    theme: Theme = DEFAULT_THEME,
) -> DistanceField:
    """Draw one player's distance field with walls and player positions.

    Returns the rendered field so callers can reuse it.
    """
    player = snapshot.players[player_id]
    field = compute_distances(player.goal, snapshot.build_collision_matrix())

    # Image arrays are indexed [row, column].
    distances = np.ma.masked_equal(field.distance.T.astype(float), float(UNREACHABLE))
    cmap = matplotlib.colormaps[theme.distance_cmap].copy()
    cmap.set_bad(theme.unreachable_color)

    fig, ax = plt.subplots(figsize=(0.6 * snapshot.grid.width + 2, 0.6 * snapshot.grid.height + 1))
    image = ax.imshow(distances, cmap=cmap, origin="upper")
    fig.colorbar(image, ax=ax, label="distance to goal")
    ax.set_xticks(np.arange(-0.5, snapshot.grid.width, 1), minor=True)
    ax.set_yticks(np.arange(-0.5, snapshot.grid.height, 1), minor=True)
    ax.grid(which="minor", color=theme.grid_line_color, linewidth=0.5)
    ax.tick_params(which="minor", length=0)

    _draw_arrows(ax, field, theme)
    for wall in snapshot.walls:
        xs, ys = _wall_segment(wall)
        ax.plot(xs, ys, color=theme.wall_color, linewidth=theme.wall_width, solid_capstyle="butt")
    for other in snapshot.players:
        if other.position is None:
            continue
        color = theme.player_colors[other.player_id % len(theme.player_colors)]
        ax.scatter(
            [other.position.x], [other.position.y],
            s=180, color=color, edgecolors="black", zorder=3,
            label=theme.player_labels.get(other.player_id, f"P{other.player_id}"),
        )
    ax.set_title(f"Player {player_id} distance field ({player.goal.name.lower()} edge)")
    ax.legend(loc="upper center", bbox_to_anchor=(0.5, -0.08), ncol=3, fontsize=8, frameon=False)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return field


def render_distance_timeline(
    decision_log_path: Path,
    output_path: Path,
    match_id: str | None = None,
    theme: Theme = DEFAULT_THEME,
) -> None:
    """Plot each player's own goal distance per turn, marking wall placements."""
    filters = [("match_id", "=", match_id)] if match_id is not None else None
    rows = pq.read_table(decision_log_path, filters=filters).to_pylist()
    if not rows:
        raise ValueError(f"No decision rows in {decision_log_path}")

    by_player: dict[int, list[dict[str, object]]] = {}
    for row in rows:
        by_player.setdefault(int(row["player_id"]), []).append(row)  # type: ignore[call-overload]

    fig, ax = plt.subplots(figsize=(8, 4))
    for player_id, player_rows in sorted(by_player.items()):
        color = theme.player_colors[player_id % len(theme.player_colors)]
        turns = [int(r["turn"]) for r in player_rows]  # type: ignore[call-overload]
        distances = [int(r["self_distance"]) for r in player_rows]  # type: ignore[call-overload]
        ax.plot(turns, distances, color=color, label=theme.player_labels.get(player_id))
        wall_turns = [t for t, r in zip(turns, player_rows, strict=True) if r["action"] == "wall"]
        wall_dists = [
            d for d, r in zip(distances, player_rows, strict=True) if r["action"] == "wall"
        ]
        ax.scatter(wall_turns, wall_dists, color=color, marker="s", s=30)
    ax.set_xlabel("turn")
    ax.set_ylabel("distance to goal")
    ax.legend(fontsize=8, frameon=False)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
