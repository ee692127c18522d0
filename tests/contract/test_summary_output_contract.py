from __future__ import annotations

import re
from datetime import UTC, datetime, timedelta

from sheetdb.models.conversion_result import ConversionResult
from sheetdb.services.summary import render_summary_line

"""SUMMARY 行フォーマット契約テスト"""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+sheet=(\S+)\s+table=([A-Za-z_][A-Za-z0-9_]*)\s+columns=([0-9]+)\s+"
    r"rows=([0-9]+)\s+elapsed_sec=([0-9]+\.?[0-9]*)\s+throughput_rps=([0-9]+\.?[0-9]*)$"
)


def _result(rows: int, elapsed: float) -> ConversionResult:
    start = datetime(2025, 1, 1, tzinfo=UTC)
    return ConversionResult(
        sheet_id="1aB-c_D",
        destination="out.db",
        table_name="walkthrough_data",
        column_names=["Name", "Age", "City"],
        converted_rows=rows,
        start_time=start,
        end_time=start + timedelta(seconds=elapsed),
        elapsed_seconds=elapsed,
        throughput_rows_per_sec=rows / elapsed if elapsed > 0 else 0.0,
    )


def test_summary_pattern_example_line():
    line = "SUMMARY sheet=ABC123 table=walkthrough_data columns=2 rows=4 elapsed_sec=0.84 throughput_rps=4.76"
    assert SUMMARY_PATTERN.match(line)


def test_rendered_summary_matches_contract():
    m = SUMMARY_PATTERN.match(render_summary_line(_result(1200, 0.8)))
    assert m
    assert m.group(1) == "1aB-c_D"
    assert m.group(3) == "3"
    assert m.group(4) == "1200"


def test_rendered_summary_tiny_elapsed_has_no_exponent():
    line = render_summary_line(_result(1, 0.0000421))
    assert "e-" not in line
    assert SUMMARY_PATTERN.match(line)
