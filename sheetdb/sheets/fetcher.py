from __future__ import annotations

import csv
import io
import logging

import requests

from ..errors import ParseError, RetrievalError
from .identifier import extract_sheet_id

"""Google Sheets CSV retrieval.

The export endpoint is an external contract: a public sheet can be downloaded as
CSV from ``/spreadsheets/d/<id>/export?format=csv`` without authentication.

Parsing rules:
- quoting is lenient (stray or unbalanced quotes are kept as text)
- rows may have fewer or more fields than the header; they are returned as-is
- blank lines are skipped
"""

__all__ = [
    "DEFAULT_EXPORT_URL",
    "RawTable",
    "build_export_url",
    "fetch_rows",
    "parse_csv",
]

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_URL = "https://docs.google.com/spreadsheets/d/{sheet_id}/export?format=csv"

# Row 0 is the header row, rows 1..N are data rows.
RawTable = list[list[str]]


def build_export_url(sheet_id: str, template: str = DEFAULT_EXPORT_URL) -> str:
    return template.format(sheet_id=sheet_id)


def parse_csv(text: str) -> RawTable:
    """Parse comma-delimited text into rows of text fields.

    Raises:
        ParseError: On any csv parser failure.
    """
    reader = csv.reader(io.StringIO(text, newline=""), strict=False)
    rows: RawTable = []
    try:
        for record in reader:
            if not record:
                continue
            rows.append(record)
    except csv.Error as e:
        raise ParseError(f"failed to parse CSV at line {reader.line_num}: {e}") from e
    return rows


def fetch_rows(
    reference: str,
    *,
    session: requests.Session | None = None,
    export_url: str = DEFAULT_EXPORT_URL,
    timeout: float | None = None,
) -> RawTable:
    """Download the sheet behind ``reference`` and parse it into a RawTable.

    Parameters
    ----------
    reference: sheet URL or bare sheet identifier
    session: optional requests session (connection reuse / testing)
    export_url: export URL template with a ``{sheet_id}`` placeholder
    timeout: seconds passed to requests; None keeps the transport default

    Raises
    ------
    InvalidReferenceError: before any network I/O when the reference is not usable
    RetrievalError: transport failure or non-2xx status
    ParseError: body could not be decoded or parsed
    """
    sheet_id = extract_sheet_id(reference)
    url = build_export_url(sheet_id, export_url)
    logger.debug("fetching sheet_id=%s url=%s", sheet_id, url)

    getter = session.get if session is not None else requests.get
    try:
        response = getter(url, timeout=timeout)
    except requests.RequestException as e:
        raise RetrievalError(f"failed to fetch sheet: {e}", url=url) from e

    status = response.status_code
    if not 200 <= status < 300:
        raise RetrievalError(f"failed to fetch sheet: HTTP {status}", url=url, status_code=status)

    try:
        text = response.content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParseError(f"failed to decode CSV payload as UTF-8: {e}") from e

    rows = parse_csv(text)
    logger.debug("fetched sheet_id=%s rows=%d bytes=%d", sheet_id, len(rows), len(response.content))
    return rows
