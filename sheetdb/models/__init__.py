"""Domain models for the sheet -> SQLite converter."""

from .conversion_result import ConversionResult
from .error_record import ErrorRecord

__all__ = [
    "ConversionResult",
    "ErrorRecord",
]
