"""SQLite destination store: naming, schema creation, row insertion."""

from .naming import derive_column_names, sanitize_column_name
from .row_insert import InsertMetrics, InsertResult, insert_rows
from .schema import DEFAULT_TABLE_NAME, create_database

__all__ = [
    "DEFAULT_TABLE_NAME",
    "InsertMetrics",
    "InsertResult",
    "create_database",
    "derive_column_names",
    "insert_rows",
    "sanitize_column_name",
]
