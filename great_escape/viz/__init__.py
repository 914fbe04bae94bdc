"""Visualization: distance-field heatmaps and decision-log timelines."""

from great_escape.viz.render import render_distance_field, render_distance_timeline
from great_escape.viz.theme import DEFAULT_THEME, Theme

__all__ = [
    "DEFAULT_THEME",
    "Theme",
    "render_distance_field",
    "render_distance_timeline",
]
