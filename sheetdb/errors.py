from __future__ import annotations

"""Error taxonomy for the sheet -> SQLite conversion pipeline.

Every failure raised by the pipeline derives from ``ConversionError`` and names
the operation that failed. Underlying causes (requests, csv, sqlite3 errors) are
chained with ``raise ... from`` so that callers can inspect ``__cause__``.
None of these errors are retried internally.
"""

__all__ = [
    "ConversionError",
    "InvalidReferenceError",
    "RetrievalError",
    "ParseError",
    "EmptySourceError",
    "StoreCreationError",
    "RowInsertError",
]


class ConversionError(Exception):
    """Base exception for conversion failures."""

    operation: str = "convert_sheet"

    def __init__(self, message: str, *, operation: str | None = None) -> None:
        super().__init__(message)
        if operation is not None:
            self.operation = operation

    @property
    def error_type(self) -> str:
        """UPPER_SNAKE classification used in the structured error log."""
        name = type(self).__name__
        chars: list[str] = []
        for i, ch in enumerate(name):
            if ch.isupper() and i > 0:
                chars.append("_")
            chars.append(ch.upper())
        return "".join(chars)


class InvalidReferenceError(ConversionError):
    """Raised when a source reference matches no known sheet identifier pattern."""

    operation = "extract_sheet_id"

    def __init__(self, reference: str) -> None:
        super().__init__(f"could not extract sheet ID from reference: {reference}")
        self.reference = reference


class RetrievalError(ConversionError):
    """Raised on a non-2xx HTTP status or a transport failure."""

    operation = "fetch_rows"

    def __init__(self, message: str, *, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ParseError(ConversionError):
    """Raised when the CSV payload cannot be parsed."""

    operation = "parse_csv"


class EmptySourceError(ConversionError):
    """Raised when retrieval returns no rows at all (not even a header)."""

    operation = "convert_sheet"


class StoreCreationError(ConversionError):
    """Raised when the destination database cannot be cleared, opened or initialized."""

    operation = "create_database"

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message)
        self.path = path


class RowInsertError(ConversionError):
    """Raised when inserting data rows fails.

    ``row_number`` is the 1-based data row that failed, or None when the
    failure is not tied to a row (the final commit).
    """

    operation = "insert_rows"

    def __init__(self, message: str, *, row_number: int | None) -> None:
        super().__init__(message)
        self.row_number = row_number
