"""CLI/config-file value resolution shared by the command-line entrypoints.

Values resolve as CLI flag > JSON config file > default, with strict
coercion so that a stray boolean or float never becomes an integer knob.
"""

from __future__ import annotations

import json
from pathlib import Path

from great_escape.config.types import PolicyConfig, ScoringWeights

__all__ = [
    "coerce_bool",
    "coerce_int",
    "get_bool",
    "get_int",
    "load_config_file",
    "policy_config_from",
]


def load_config_file(path: Path | None) -> dict[str, object]:
    """Load a JSON object from *path*, or an empty mapping when no path is given."""
    if path is None:
        return {}
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("config file must contain a JSON object")
    return payload


def coerce_bool(raw: object, key: str) -> bool:
    """Coerce raw value to bool with strict string-check."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"{key} must be a boolean value")


def coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integer floats."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if raw != int(raw):
            raise ValueError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    if isinstance(raw, (int, str)):
        try:
            return int(raw)
        except ValueError as exc:
            raise ValueError(f"{key} must be an integer value, got {raw!r}") from exc
    raise ValueError(f"{key} must be an integer value")


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def get_bool(cli_val: bool | None, key: str, file_cfg: dict[str, object], default: bool) -> bool:
    return coerce_bool(_get_val(cli_val, key, file_cfg, default), key)


def get_int(cli_val: int | None, key: str, file_cfg: dict[str, object], default: int) -> int:
    return coerce_int(_get_val(cli_val, key, file_cfg, default), key)


def policy_config_from(
    file_cfg: dict[str, object],
    leader_distance_threshold: int | None = None,
    safety_margin: int | None = None,
    turn_budget_ms: int | None = None,
    sticky_walls: bool | None = None,
) -> PolicyConfig:
    """Build a :class:`PolicyConfig` from CLI overrides layered over a config file."""
    defaults = PolicyConfig()
    weights = ScoringWeights(
        leader=get_int(None, "leader_weight", file_cfg, defaults.weights.leader),
        self_=get_int(None, "self_weight", file_cfg, defaults.weights.self_),
        other=get_int(None, "other_weight", file_cfg, defaults.weights.other),
    )
    turn_budget = get_int(turn_budget_ms, "turn_budget_ms", file_cfg, defaults.turn_budget_ms)
    return PolicyConfig(
        leader_distance_threshold=get_int(
            leader_distance_threshold,
            "leader_distance_threshold",
            file_cfg,
            defaults.leader_distance_threshold,
        ),
        safety_margin=get_int(safety_margin, "safety_margin", file_cfg, defaults.safety_margin),
        weights=weights,
        turn_budget_ms=turn_budget,
        first_turn_budget_ms=max(
            turn_budget,
            get_int(None, "first_turn_budget_ms", file_cfg, defaults.first_turn_budget_ms),
        ),
        sticky_walls=get_bool(sticky_walls, "sticky_walls", file_cfg, defaults.sticky_walls),
    )
