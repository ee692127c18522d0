from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from conftest import SAMPLE_URL, make_response
from sheetdb.cli import main as cli_main
from sheetdb.errors import RowInsertError


@pytest.fixture(autouse=True)
def no_tty():
    with patch("sheetdb.services.progress.is_tty_enabled", return_value=False):
        yield


def test_cli_success_prints_progress_and_summary(temp_workdir: Path, mock_get, capsys):
    code = cli_main([SAMPLE_URL, "out.db"])

    out = capsys.readouterr().out
    assert code == 0
    assert "INFO Fetching data from Google Sheet..." in out
    assert "INFO Found 2 columns and 2 rows" in out
    assert "INFO Successfully converted 2 rows" in out
    assert "SUMMARY sheet=ABC123 table=walkthrough_data columns=2 rows=2" in out
    assert (temp_workdir / "out.db").exists()


def test_cli_usage_error_exits_2(capsys):
    with pytest.raises(SystemExit) as e:
        cli_main([])
    assert e.value.code == 2


def test_cli_invalid_reference(temp_workdir: Path, mock_get, capsys):
    code = cli_main(["not a sheet", "out.db"])

    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR extract_sheet_id: could not extract sheet ID" in out
    mock_get.assert_not_called()
    assert not (temp_workdir / "out.db").exists()


def test_cli_http_failure_writes_error_log(temp_workdir: Path, mock_get, capsys):
    mock_get.return_value = make_response("", status_code=403)

    code = cli_main(["ABC123", "out.db"])

    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR fetch_rows: failed to fetch sheet: HTTP 403" in out
    logs = list((temp_workdir / "logs").glob("errors-*.log"))
    assert len(logs) == 1
    record = json.loads(logs[0].read_text(encoding="utf-8").strip())
    assert record["error_type"] == "RETRIEVAL_ERROR"
    assert record["row"] == -1
    assert record["source"] == "ABC123"
    assert record["destination"] == "out.db"
    assert f"error details written to {logs[0].relative_to(temp_workdir)}" in out


def test_cli_empty_source(temp_workdir: Path, mock_get, capsys):
    mock_get.return_value = make_response("")
    code = cli_main(["ABC123", "out.db"])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR convert_sheet: no data found in the spreadsheet" in out


def test_cli_uses_config_file(temp_workdir: Path, write_config: Path, mock_get, capsys):
    code = cli_main(["ABC123", "out.db"])

    assert code == 0
    mock_get.assert_called_once_with("https://example.test/sheets/ABC123.csv", timeout=15)
    assert "table=sheet_rows" in capsys.readouterr().out


def test_cli_explicit_config_missing(temp_workdir: Path, mock_get, capsys):
    code = cli_main(["ABC123", "out.db", "--config", "missing.yml"])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR config: config file not found: missing.yml" in out
    mock_get.assert_not_called()


def test_cli_env_file_overrides(temp_workdir: Path, mock_get, capsys, monkeypatch):
    # registered twice so that the value loaded from .env is removed afterwards
    monkeypatch.setenv("SHEETDB_TABLE_NAME", "unused")
    monkeypatch.delenv("SHEETDB_TABLE_NAME")
    (temp_workdir / ".env").write_text("SHEETDB_TABLE_NAME=from_dotenv\n", encoding="utf-8")

    code = cli_main(["ABC123", "out.db"])

    assert code == 0
    assert "table=from_dotenv" in capsys.readouterr().out


def test_cli_debug_mode(temp_workdir: Path, mock_get, capsys):
    code = cli_main(["ABC123", "out.db", "--debug"])
    out = capsys.readouterr().out
    assert code == 0
    assert "DEBUG debug mode enabled" in out
    assert "DEBUG fetching sheet_id=ABC123" in out


def test_cli_inspect(temp_workdir: Path, mock_get, capsys):
    code = cli_main([SAMPLE_URL, "out.db", "--inspect", "1"])
    out = capsys.readouterr().out
    assert code == 0
    assert "TABLE: walkthrough_data cols=['id', 'Name', 'Age']" in out
    assert "Alice" in out
    assert "Bob" not in out.split("TABLE:")[1]


@pytest.mark.parametrize("value", ["-3", "abc"])
def test_cli_inspect_rejects_invalid_count(temp_workdir: Path, mock_get, capsys, value):
    with pytest.raises(SystemExit) as e:
        cli_main(["ABC123", "out.db", "--inspect", value])
    assert e.value.code == 2
    assert "--inspect" in capsys.readouterr().err
    mock_get.assert_not_called()


def test_cli_inspect_zero_rows(temp_workdir: Path, mock_get, capsys):
    code = cli_main([SAMPLE_URL, "out.db", "--inspect", "0"])
    out = capsys.readouterr().out
    assert code == 0
    assert "(no rows)" in out


def test_cli_commit_failure_logs_row_minus_one(temp_workdir: Path, mock_get, capsys):
    err = RowInsertError("failed to commit inserted rows: disk I/O error", row_number=None)
    with patch("sheetdb.services.orchestrator.insert_rows", side_effect=err):
        code = cli_main(["ABC123", "out.db"])

    assert code == 1
    assert "ERROR insert_rows: failed to commit inserted rows" in capsys.readouterr().out
    (log_file,) = (temp_workdir / "logs").glob("errors-*.log")
    assert json.loads(log_file.read_text(encoding="utf-8"))["row"] == -1
