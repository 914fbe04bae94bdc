"""Tests for the self-play CLI."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pyarrow.parquet as pq
import pytest

from great_escape.run_match import main
from great_escape.simulation.match import MatchResult


def test_summary_and_logs(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["--seed", "3", "--n-matches", "2", "--max-turns", "4", "--out-dir", str(tmp_path)])

    summary = json.loads(capsys.readouterr().out)
    assert summary["matches"] == 2
    assert summary["match_ids"] == ["9x9_p2_s3", "9x9_p2_s4"]
    assert summary["draws"] == 2
    assert summary["eliminations"] == 0
    for match_id in summary["match_ids"]:
        table = pq.read_table(tmp_path / match_id / "logs" / "decision_log.parquet")
        assert table.num_rows == 8


def test_config_file_values(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_path = tmp_path / "match.json"
    config_path.write_text(json.dumps({"players": 3, "max_turns": 2, "seed": 9}))
    main(["--config", str(config_path)])

    summary = json.loads(capsys.readouterr().out)
    assert summary["match_ids"] == ["9x9_p3_s9"]
    assert not (tmp_path / "9x9_p3_s9").exists()


def test_invalid_player_count_exits(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit):
        main(["--players", "4"])
    assert "player_count" in capsys.readouterr().err


def test_invalid_match_count_exits() -> None:
    with pytest.raises(SystemExit):
        main(["--n-matches", "0"])


@pytest.mark.parametrize(("flag", "expected"), [("--no-sticky-walls", False), ("--sticky-walls", True)])
def test_sticky_walls_flag_reaches_policy(
    flag: str, expected: bool, capsys: pytest.CaptureFixture[str]
) -> None:
    result = MatchResult(
        match_id="9x9_p2_s0",
        rounds=1,
        finish_order=(),
        eliminated=(),
        walls_placed=0,
        timed_out=False,
    )
    with patch("great_escape.run_match.run_match", return_value=result) as mock_run:
        main([flag])
    mock_run.assert_called_once()
    policy = mock_run.call_args.args[1]
    assert policy.sticky_walls is expected
    assert json.loads(capsys.readouterr().out)["matches"] == 1
