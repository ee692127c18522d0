from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

import requests

from ..config.loader import ConvertConfig
from ..db.row_insert import insert_rows
from ..db.schema import create_database
from ..errors import EmptySourceError
from ..models.conversion_result import ConversionResult
from ..sheets.fetcher import fetch_rows
from ..sheets.identifier import extract_sheet_id

"""Conversion orchestration: fetch -> create schema -> insert rows.

The pipeline is sequential and owns its SQLite connection for the duration of
one call. Progress messages go to an optional one-way sink; whatever the sink
does (including raising) has no effect on the conversion.
"""

__all__ = [
    "ProgressSink",
    "convert_sheet",
]

logger = logging.getLogger(__name__)

ProgressSink = Callable[[str], None]


def _notify(progress: ProgressSink | None, message: str) -> None:
    logger.debug("progress: %s", message)
    if progress is None:
        return
    try:
        progress(message)
    except Exception:
        logger.warning("progress sink failed on message %r (ignored)", message, exc_info=True)


def convert_sheet(
    source: str,
    destination: str | Path,
    progress: ProgressSink | None = None,
    *,
    config: ConvertConfig | None = None,
    session: requests.Session | None = None,
) -> ConversionResult:
    """Convert the public sheet behind ``source`` into a SQLite file at ``destination``.

    Args:
        source: Sheet URL or bare sheet identifier
        destination: Database path; an existing file there is replaced
        progress: Optional sink receiving human-readable milestone messages
        config: Table name / export URL / timeout settings (defaults if None)
        session: Optional requests session used for the download

    Returns:
        ConversionResult with column and row counts

    Raises:
        ConversionError subclass: InvalidReferenceError, RetrievalError,
        ParseError, EmptySourceError, StoreCreationError or RowInsertError
    """
    cfg = config or ConvertConfig()
    start_time = datetime.now(UTC)

    _notify(progress, "Fetching data from Google Sheet...")
    records = fetch_rows(source, session=session, export_url=cfg.export_url, timeout=cfg.timeout)

    if not records:
        raise EmptySourceError("no data found in the spreadsheet")

    headers = records[0]
    data = records[1:]
    _notify(progress, f"Found {len(headers)} columns and {len(data)} rows")

    _notify(progress, "Creating database...")
    conn = create_database(destination, headers, table_name=cfg.table_name)
    try:
        _notify(progress, "Inserting data...")
        result = insert_rows(conn, headers, data, table_name=cfg.table_name)
    finally:
        conn.close()

    end_time = datetime.now(UTC)
    elapsed_seconds = (end_time - start_time).total_seconds()
    throughput_rps = result.inserted_rows / elapsed_seconds if elapsed_seconds > 0 else 0.0

    _notify(progress, f"Successfully converted {result.inserted_rows} rows")
    logger.debug(
        "converted table=%s columns=%d rows=%d destination=%s",
        cfg.table_name,
        len(result.column_names),
        result.inserted_rows,
        destination,
    )

    return ConversionResult(
        sheet_id=extract_sheet_id(source),
        destination=str(destination),
        table_name=cfg.table_name,
        column_names=result.column_names,
        converted_rows=result.inserted_rows,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_seconds,
        throughput_rows_per_sec=throughput_rps,
    )
