"""I/O layer: turn protocol, Parquet schemas and decision-log persistence."""

from great_escape.io.persistence import DecisionLog, flush_decision_columns
from great_escape.io.protocol import (
    GameHeader,
    format_action,
    format_header,
    format_snapshot,
    parse_action,
    parse_header,
    read_snapshot,
)
from great_escape.io.schemas import DECISION_LOG_SCHEMA, DECISION_LOG_SCHEMA_VERSION

__all__ = [
    "DECISION_LOG_SCHEMA",
    "DECISION_LOG_SCHEMA_VERSION",
    "DecisionLog",
    "GameHeader",
    "flush_decision_columns",
    "format_action",
    "format_header",
    "format_snapshot",
    "parse_action",
    "parse_header",
    "read_snapshot",
]
