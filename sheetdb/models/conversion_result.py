from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Result model for a completed sheet -> SQLite conversion.

Only successful conversions produce a ConversionResult; failures are raised as
``sheetdb.errors.ConversionError`` subclasses.
"""

__all__ = [
    "ConversionResult",
]


@dataclass(frozen=True)
class ConversionResult:
    """Counts and timings of one successful conversion."""
    sheet_id: str
    destination: str
    table_name: str
    column_names: list[str]  # sanitized, without the identity column
    converted_rows: int  # data rows, header excluded
    start_time: datetime  # UTC
    end_time: datetime  # UTC
    elapsed_seconds: float
    throughput_rows_per_sec: float

    @property
    def total_columns(self) -> int:
        return len(self.column_names)
