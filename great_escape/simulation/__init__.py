"""Local self-play: referee and match loop with Parquet decision logs."""

from great_escape.simulation.match import MatchResult, run_match
from great_escape.simulation.referee import PlayerStatus, Referee, open_edge_graph

__all__ = [
    "MatchResult",
    "PlayerStatus",
    "Referee",
    "open_edge_graph",
    "run_match",
]
