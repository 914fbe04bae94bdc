"""Visualization theme for board renderers.

A frozen dataclass groups the styling constants so callers can swap
palettes programmatically.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Theme:
    """Complete collection of visualization style tokens."""

    distance_cmap: str = "viridis_r"
    unreachable_color: str = "#3A3A3A"
    wall_color: str = "#D32F2F"
    wall_width: float = 4.0
    grid_line_color: str = "#CCCCCC"
    arrow_color: str = "#FFFFFF"
    player_colors: tuple[str, ...] = ("#2196F3", "#FF9800", "#4CAF50")
    player_labels: dict[int, str] = field(
        default_factory=lambda: {0: "P0 (right)", 1: "P1 (left)", 2: "P2 (down)"}
    )


DEFAULT_THEME = Theme()
