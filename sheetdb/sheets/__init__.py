"""Sheet reference handling and CSV retrieval."""

from .fetcher import DEFAULT_EXPORT_URL, RawTable, build_export_url, fetch_rows, parse_csv
from .identifier import extract_sheet_id

__all__ = [
    "DEFAULT_EXPORT_URL",
    "RawTable",
    "build_export_url",
    "extract_sheet_id",
    "fetch_rows",
    "parse_csv",
]
