from __future__ import annotations

import time
from pathlib import Path

from conftest import make_response
from sheetdb import convert_sheet

"""Performance smoke test: a 20k row sheet converts quickly with a mocked fetch."""

ROWS = 20_000


def test_perf_smoke_conversion(temp_workdir: Path, mock_get):
    body = "Name,Age,City\n" + "".join(f"user{i},{i % 90},city{i % 50}\n" for i in range(ROWS))
    mock_get.return_value = make_response(body)

    start = time.perf_counter()
    result = convert_sheet("ABC123", "perf.db")
    elapsed = time.perf_counter() - start

    assert result.converted_rows == ROWS
    # lenient so CI stays green on slow runners
    assert elapsed < 15, f"conversion too slow: {elapsed:.3f}s"
    assert result.throughput_rows_per_sec > 1_000
