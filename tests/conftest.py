# Shared pytest fixtures
from __future__ import annotations

import logging
import sqlite3
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from sheetdb.logging.init import LOGGER_NAME, reset_logging

SAMPLE_URL = "https://docs.google.com/spreadsheets/d/ABC123/edit#gid=0"
SAMPLE_CSV = "Name,Age\nAlice,30\nBob,\n"


def make_response(body: str | bytes, status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.content = body.encode("utf-8") if isinstance(body, str) else body
    return response


def fetch_table(db_path: Path, table: str = "walkthrough_data") -> tuple[list[str], list[tuple]]:
    """Return (column names, rows ordered by id) of ``table``."""
    conn = sqlite3.connect(db_path)
    try:
        cur = conn.execute(f'SELECT * FROM "{table}" ORDER BY id')
        columns = [d[0] for d in cur.description]
        return columns, cur.fetchall()
    finally:
        conn.close()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture(autouse=True)
def clean_logging():
    """Undo CLI logging setup so caplog sees records from the sheetdb logger."""
    reset_logging()
    yield
    reset_logging()
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture()
def mock_get():
    """Patch requests.get as used by the fetcher; returns SAMPLE_CSV by default."""
    with patch("sheetdb.sheets.fetcher.requests.get") as mocked:
        mocked.return_value = make_response(SAMPLE_CSV)
        yield mocked


@pytest.fixture()
def sample_config_yaml() -> str:
    return """table_name: sheet_rows
export_url: https://example.test/sheets/{sheet_id}.csv
timeout: 15
logs_directory: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "convert.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg
