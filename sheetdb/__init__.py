"""sheetdb: convert a public Google Sheet into a local SQLite database."""

from logging import NullHandler, getLogger

from .errors import (
    ConversionError,
    EmptySourceError,
    InvalidReferenceError,
    ParseError,
    RetrievalError,
    RowInsertError,
    StoreCreationError,
)
from .models.conversion_result import ConversionResult
from .services.orchestrator import convert_sheet

__version__ = "0.1.0"

# Silent unless the application configures handlers (the CLI does)
getLogger(__name__).addHandler(NullHandler())

__all__ = [
    "ConversionError",
    "ConversionResult",
    "EmptySourceError",
    "InvalidReferenceError",
    "ParseError",
    "RetrievalError",
    "RowInsertError",
    "StoreCreationError",
    "convert_sheet",
]
