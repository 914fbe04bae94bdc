"""CLI entrypoint for local self-play matches.

Runs one or more seeded matches, writes decision logs under
``<out-dir>/<match_id>/logs/`` and prints a JSON summary.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from great_escape.config.constants import BOARD_HEIGHT, BOARD_WIDTH, MAX_TURNS
from great_escape.config.loading import get_int, load_config_file, policy_config_from
from great_escape.config.types import MatchConfig
from great_escape.simulation.match import MatchResult, match_id_for, run_match


def _summarize(results: list[MatchResult]) -> dict[str, object]:
    wins: dict[str, int] = {}
    for result in results:
        if result.winner is not None:
            wins[str(result.winner)] = wins.get(str(result.winner), 0) + 1
    return {
        "matches": len(results),
        "wins": wins,
        "draws": sum(1 for r in results if r.winner is None),
        "walls_placed": sum(r.walls_placed for r in results),
        "eliminations": sum(len(r.eliminated) for r in results),
        "timed_out": sum(1 for r in results if r.timed_out),
        "match_ids": [r.match_id for r in results],
    }


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Run local Great Escape self-play matches")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--players", type=int, default=None)
    parser.add_argument("--max-turns", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--n-matches", type=int, default=None)
    parser.add_argument("--leader-distance-threshold", type=int, default=None)
    parser.add_argument("--safety-margin", type=int, default=None)
    parser.add_argument("--turn-budget-ms", type=int, default=None)
    parser.add_argument(
        "--sticky-walls",
        action=argparse.BooleanOptionalAction,
        default=None,
    )
    parser.add_argument("--out-dir", type=Path, default=None)
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for self-play."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        file_cfg = load_config_file(args.config)
        policy = policy_config_from(
            file_cfg,
            leader_distance_threshold=args.leader_distance_threshold,
            safety_margin=args.safety_margin,
            turn_budget_ms=args.turn_budget_ms,
            sticky_walls=args.sticky_walls,
        )
        width = get_int(args.width, "width", file_cfg, BOARD_WIDTH)
        height = get_int(args.height, "height", file_cfg, BOARD_HEIGHT)
        players = get_int(args.players, "players", file_cfg, 2)
        max_turns = get_int(args.max_turns, "max_turns", file_cfg, MAX_TURNS)
        seed = get_int(args.seed, "seed", file_cfg, 0)
        n_matches = get_int(args.n_matches, "n_matches", file_cfg, 1)
        if n_matches < 1:
            raise ValueError("n_matches must be >= 1")
        configs = [
            MatchConfig(
                width=width,
                height=height,
                player_count=players,
                max_turns=max_turns,
                seed=seed + i,
            )
            for i in range(n_matches)
        ]
    except ValueError as exc:
        parser.error(str(exc))

    out_dir = args.out_dir if args.out_dir is not None else file_cfg.get("out_dir")
    results = []
    for config in configs:
        match_dir = None
        if out_dir is not None:
            match_dir = Path(str(out_dir)) / match_id_for(config)
        results.append(run_match(config, policy, out_dir=match_dir))
    print(json.dumps(_summarize(results), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
