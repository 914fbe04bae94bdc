"""Self-play match loop: every seat is driven by the decision policy."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from random import Random

from great_escape.config.types import MatchConfig, PolicyConfig
from great_escape.engine.policy import PlaceWallAction, TurnState, decide
from great_escape.io.persistence import DecisionLog, decision_row
from great_escape.io.protocol import format_action, parse_action
from great_escape.simulation.referee import Referee

__all__ = ["MatchResult", "decision_log_path", "match_id_for", "run_match"]


@dataclass(frozen=True)
class MatchResult:
    """Outcome of one self-play match."""

    match_id: str
    rounds: int
    finish_order: tuple[int, ...]
    eliminated: tuple[int, ...]
    walls_placed: int
    timed_out: bool

    @property
    def winner(self) -> int | None:
        return self.finish_order[0] if self.finish_order else None


def match_id_for(config: MatchConfig) -> str:
    """Reproducible match ID, stable across runs for identical configs."""
    return f"{config.width}x{config.height}_p{config.player_count}_s{config.seed}"


def decision_log_path(out_dir: Path) -> Path:
    return Path(out_dir) / "logs" / "decision_log.parquet"


def run_match(
    config: MatchConfig,
    policy: PolicyConfig | None = None,
    out_dir: Path | None = None,
    clock: Callable[[], float] = time.perf_counter,
) -> MatchResult:
    """Play one match to completion and optionally log every decision.

    Actions travel through the text protocol in both directions, so a
    match also exercises the emitter and the parser.
    """
    policy = policy or PolicyConfig()
    referee = Referee(config, Random(config.seed))
    match_id = match_id_for(config)
    states = {player_id: TurnState() for player_id in range(config.player_count)}
    log = DecisionLog(decision_log_path(out_dir)) if out_dir is not None else None
    walls_placed = 0
    rounds = 0
    timed_out = False

    try:
        while rounds < config.max_turns and not referee.is_over():
            rounds += 1
            for player_id in range(config.player_count):
                if not referee.is_playing(player_id) or referee.is_over():
                    continue
                snapshot = referee.snapshot_for(player_id)
                started = time.perf_counter()
                decision = decide(snapshot, states[player_id], policy, clock=clock)
                elapsed_ms = (time.perf_counter() - started) * 1000.0
                states[player_id] = decision.state
                if decision.search is not None and decision.search.timed_out:
                    timed_out = True
                if log is not None:
                    log.append(decision_row(match_id, snapshot, decision, elapsed_ms))

                action = parse_action(format_action(decision.action))
                if referee.apply(player_id, action) and isinstance(action, PlaceWallAction):
                    walls_placed += 1
    finally:
        if log is not None:
            log.close()

    return MatchResult(
        match_id=match_id,
        rounds=rounds,
        finish_order=tuple(referee.finish_order),
        eliminated=tuple(referee.eliminated),
        walls_placed=walls_placed,
        timed_out=timed_out,
    )
