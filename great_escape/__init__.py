"""Per-turn decision engine for The Great Escape board game."""

__version__ = "0.1.0"
