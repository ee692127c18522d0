from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the structured error log.

A record describes one failed conversion. ``row`` is the 1-based data row that
failed to insert, or -1 when the failure is not tied to a row (fetch, parse,
store creation ...).
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        source: source reference as given by the caller
        destination: destination database path
        row: 1-based data row number, -1 when unknown
        error_type: classification in UPPER_SNAKE_CASE
        message: error message including the failing operation
    """
    timestamp: str
    source: str
    destination: str
    row: int
    error_type: str
    message: str

    @staticmethod
    def create(source: str, destination: str, row: int, error_type: str, message: str) -> ErrorRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            source=source,
            destination=destination,
            row=row,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
