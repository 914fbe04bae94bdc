"""CLI entrypoint for the bot: play one session over stdin/stdout.

stdout carries exactly one action line per turn. Debug output (a JSON
record per turn and the acting player's distance field) goes to stderr.
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path
from typing import TextIO

from great_escape.config.loading import load_config_file, policy_config_from
from great_escape.config.types import PolicyConfig
from great_escape.domain.board import BoardSnapshot
from great_escape.engine.policy import Decision, PlaceWallAction, TurnState, decide
from great_escape.errors import ProtocolError
from great_escape.io.persistence import DecisionLog, decision_row
from great_escape.io.protocol import format_action, parse_header, read_snapshot

SESSION_ID = "live"
"""Match ID recorded in the decision log for a live session."""


def _debug_record(snapshot: BoardSnapshot, decision: Decision, elapsed_ms: float) -> dict:
    search = decision.search
    return {
        "turn": decision.state.turn,
        "ranking": [
            {"id": p.player_id, "distance": p.distance, "order": p.order, "rank": p.rank}
            for p in decision.ranking.players
        ],
        "walls_left": snapshot.me.walls_left,
        "evaluated": search.evaluated if search is not None else 0,
        "wall": isinstance(decision.action, PlaceWallAction),
        "commit_to_walls": decision.state.commit_to_walls,
        "elapsed_ms": round(elapsed_ms, 3),
    }


def play_session(
    stdin: TextIO,
    stdout: TextIO,
    stderr: TextIO,
    policy: PolicyConfig,
    debug: bool = False,
    message: str = "",
    log: DecisionLog | None = None,
) -> int:
    """Answer every turn read from *stdin*; returns the number of turns played."""
    lines = (line.strip() for line in iter(stdin.readline, ""))
    try:
        header = parse_header(next(lines))
    except StopIteration as exc:
        raise ProtocolError("input ended before the session header") from exc
    state = TurnState()
    turns = 0
    while True:
        try:
            snapshot = read_snapshot(lines, header)
        except EOFError:
            break
        started = time.perf_counter()
        decision = decide(snapshot, state, policy)
        elapsed_ms = (time.perf_counter() - started) * 1000.0
        state = decision.state
        turns += 1

        print(format_action(decision.action, message), file=stdout, flush=True)
        if log is not None:
            log.append(decision_row(SESSION_ID, snapshot, decision, elapsed_ms))
        if debug:
            print(json.dumps(_debug_record(snapshot, decision, elapsed_ms)), file=stderr)
            print(decision.fields[snapshot.my_id].dump(), file=stderr, flush=True)
    return turns


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Play The Great Escape over stdin/stdout")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--leader-distance-threshold", type=int, default=None)
    parser.add_argument("--safety-margin", type=int, default=None)
    parser.add_argument("--turn-budget-ms", type=int, default=None)
    parser.add_argument(
        "--sticky-walls",
        action=argparse.BooleanOptionalAction,
        default=None,
    )
    parser.add_argument("--message", type=str, default="", help="text appended to each action")
    parser.add_argument(
        "--decision-log",
        type=Path,
        default=None,
        help="write one Parquet row per turn to this path",
    )
    parser.add_argument("--debug", action="store_true", help="write diagnostics to stderr")
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for a live bot session."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        policy = policy_config_from(
            load_config_file(args.config),
            leader_distance_threshold=args.leader_distance_threshold,
            safety_margin=args.safety_margin,
            turn_budget_ms=args.turn_budget_ms,
            sticky_walls=args.sticky_walls,
        )
    except ValueError as exc:
        parser.error(str(exc))

    log = DecisionLog(args.decision_log) if args.decision_log is not None else None
    try:
        play_session(
            sys.stdin,
            sys.stdout,
            sys.stderr,
            policy,
            debug=args.debug,
            message=args.message,
            log=log,
        )
    finally:
        if log is not None:
            log.close()


if __name__ == "__main__":
    main()
