"""Parquet persistence for the decision log stream."""

from __future__ import annotations

from pathlib import Path
from types import TracebackType

import pyarrow as pa
import pyarrow.parquet as pq

from great_escape.config.constants import FLUSH_THRESHOLD
from great_escape.domain.board import BoardSnapshot
from great_escape.engine.policy import Decision, MoveAction, PlaceWallAction
from great_escape.io.schemas import (
    DECISION_LOG_COLUMNS,
    DECISION_LOG_SCHEMA,
    DECISION_LOG_SCHEMA_VERSION,
)

__all__ = ["DecisionLog", "decision_row", "flush_decision_columns"]

Row = dict[str, object]


def flush_decision_columns(
    columns: dict[str, list[object]],
    log_path: Path,
    writer: pq.ParquetWriter | None,
) -> pq.ParquetWriter | None:
    """Write accumulated decision rows to Parquet and clear in-memory buffers."""
    if not columns["turn"]:
        return writer
    table = pa.Table.from_pydict(columns, schema=DECISION_LOG_SCHEMA)
    if writer is None:
        writer = pq.ParquetWriter(log_path, DECISION_LOG_SCHEMA)
    writer.write_table(table)
    for values in columns.values():
        values.clear()
    return writer


def decision_row(
    match_id: str, snapshot: BoardSnapshot, decision: Decision, elapsed_ms: float
) -> Row:
    """Flatten one decision into a row matching ``DECISION_LOG_SCHEMA``."""
    action = decision.action
    me = decision.ranking.me
    leader = decision.ranking.leader
    search = decision.search
    best = search.best if search is not None else None
    row: Row = {
        "schema_version": DECISION_LOG_SCHEMA_VERSION,
        "match_id": match_id,
        "turn": decision.state.turn,
        "player_id": snapshot.my_id,
        "action": "move",
        "direction": None,
        "wall_x": None,
        "wall_y": None,
        "wall_orientation": None,
        "walls_left": snapshot.me.walls_left,
        "self_distance": me.distance,
        "leader_id": leader.player_id if leader is not None else None,
        "leader_distance": leader.distance if leader is not None else None,
        "candidates": search.candidates if search is not None else 0,
        "evaluated": search.evaluated if search is not None else 0,
        "timed_out": search.timed_out if search is not None else False,
        "best_score": best.score if best is not None else None,
        "commit_to_walls": decision.state.commit_to_walls,
        "elapsed_ms": elapsed_ms,
    }
    if isinstance(action, MoveAction):
        row["direction"] = action.direction.name
    elif isinstance(action, PlaceWallAction):
        row["action"] = "wall"
        row["wall_x"] = action.wall.anchor.x
        row["wall_y"] = action.wall.anchor.y
        row["wall_orientation"] = action.wall.orientation.value
    return row


class DecisionLog:
    """Buffered Parquet writer for decision rows.

    Rows are flushed once ``flush_threshold`` accumulate and on
    :meth:`close`. Use as a context manager to guarantee the final flush.
    """

    def __init__(self, path: Path, flush_threshold: int = FLUSH_THRESHOLD) -> None:
        if flush_threshold < 1:
            raise ValueError("flush_threshold must be >= 1")
        self.path = Path(path)
        self.flush_threshold = flush_threshold
        self.rows_written = 0
        self._columns: dict[str, list[object]] = {name: [] for name in DECISION_LOG_COLUMNS}
        self._writer: pq.ParquetWriter | None = None

    def append(self, row: Row) -> None:
        missing = set(DECISION_LOG_COLUMNS) - row.keys()
        if missing:
            raise ValueError(f"decision row is missing columns: {sorted(missing)}")
        for name in DECISION_LOG_COLUMNS:
            self._columns[name].append(row[name])
        self.rows_written += 1
        if len(self._columns["turn"]) >= self.flush_threshold:
            self.flush()

    def flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._writer = flush_decision_columns(self._columns, self.path, self._writer)

    def close(self) -> None:
        self.flush()
        if self._writer is not None:
            self._writer.close()
            self._writer = None

    def __enter__(self) -> DecisionLog:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
