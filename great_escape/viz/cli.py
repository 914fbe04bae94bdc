from __future__ import annotations

import argparse
from pathlib import Path

from great_escape.io.protocol import parse_header, read_snapshot
from great_escape.viz.render import render_distance_field, render_distance_timeline


def _build_field_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("field", help="Render one player's distance field from a snapshot file")
    p.set_defaults(func=_handle_field)
    p.add_argument(
        "--snapshot",
        type=Path,
        required=True,
        help="header line followed by one turn in protocol format",
    )
    p.add_argument("--player", type=int, default=None, help="defaults to the header's own id")
    p.add_argument("--output", type=Path, required=True)


def _build_timeline_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("timeline", help="Plot goal distance per turn from a decision log")
    p.set_defaults(func=_handle_timeline)
    p.add_argument("--decision-log", type=Path, required=True)
    p.add_argument("--match-id", type=str, default=None)
    p.add_argument("--output", type=Path, required=True)


def _handle_field(args: argparse.Namespace) -> None:
    lines = iter(Path(args.snapshot).read_text(encoding="utf-8").splitlines())
    header = parse_header(next(lines))
    snapshot = read_snapshot(lines, header)
    player_id = header.my_id if args.player is None else args.player
    if not 0 <= player_id < snapshot.player_count:
        raise ValueError(f"player must be in [0, {snapshot.player_count})")
    if snapshot.players[player_id].position is None:
        raise ValueError(f"player {player_id} is not on the board")
    render_distance_field(snapshot, player_id, args.output)


def _handle_timeline(args: argparse.Namespace) -> None:
    render_distance_timeline(args.decision_log, args.output, match_id=args.match_id)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Great Escape visualization tools")
    sub = parser.add_subparsers(dest="command")
    _build_field_parser(sub)
    _build_timeline_parser(sub)
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        raise SystemExit(1)
    args.func(args)


if __name__ == "__main__":
    main()
