"""Parquet schema for the per-turn decision log.

Every module that writes or reads decision records works against this
single column contract.
"""

from __future__ import annotations

import pyarrow as pa

DECISION_LOG_SCHEMA_VERSION = 1

DECISION_LOG_SCHEMA = pa.schema(
    [
        ("schema_version", pa.int64()),
        ("match_id", pa.string()),
        ("turn", pa.int64()),
        ("player_id", pa.int64()),
        ("action", pa.string()),
        ("direction", pa.string()),
        ("wall_x", pa.int64()),
        ("wall_y", pa.int64()),
        ("wall_orientation", pa.string()),
        ("walls_left", pa.int64()),
        ("self_distance", pa.int64()),
        ("leader_id", pa.int64()),
        ("leader_distance", pa.int64()),
        ("candidates", pa.int64()),
        ("evaluated", pa.int64()),
        ("timed_out", pa.bool_()),
        ("best_score", pa.int64()),
        ("commit_to_walls", pa.bool_()),
        ("elapsed_ms", pa.float64()),
    ]
)

DECISION_LOG_COLUMNS: list[str] = DECISION_LOG_SCHEMA.names
"""Column names in schema order."""
