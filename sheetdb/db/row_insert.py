from __future__ import annotations

import logging
import sqlite3
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from ..errors import RowInsertError
from .naming import derive_column_names, quote_identifier
from .schema import DEFAULT_TABLE_NAME

"""Row insertion into the generated table.

The INSERT statement always carries exactly ``len(headers)`` placeholders:
- short rows are padded with empty text
- extra trailing fields are dropped

All rows are written in one transaction. The first failing row aborts the pass:
rows before it are committed, the rest are not attempted and the 1-based row
number is reported. The caller decides whether to keep the partial table.
"""

__all__ = [
    "InsertMetrics",
    "InsertResult",
    "build_insert_sql",
    "fit_row",
    "insert_rows",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InsertMetrics:
    """Timing data for one insert pass."""
    row_count: int  # rows attempted
    elapsed_seconds: float
    start_time: float  # time.time()
    end_time: float


@dataclass(frozen=True)
class InsertResult:
    inserted_rows: int
    column_names: list[str]


def build_insert_sql(headers: Sequence[str], table_name: str = DEFAULT_TABLE_NAME) -> str:
    column_names = derive_column_names(headers)
    cols_sql = ", ".join(quote_identifier(c) for c in column_names)
    placeholders = ", ".join("?" for _ in column_names)
    return f"INSERT INTO {quote_identifier(table_name)} ({cols_sql}) VALUES ({placeholders})"


def fit_row(row: Sequence[str], width: int) -> list[str]:
    """Pad ``row`` with empty strings or truncate it to ``width`` fields."""
    values = list(row[:width])
    if len(values) < width:
        values.extend([""] * (width - len(values)))
    return values


def _report_metrics(
    metrics_callback: Callable[[InsertMetrics], None] | None,
    row_count: int,
    start_time: float,
) -> None:
    if metrics_callback is None:
        return
    end_time = time.time()
    metrics = InsertMetrics(
        row_count=row_count,
        elapsed_seconds=end_time - start_time,
        start_time=start_time,
        end_time=end_time,
    )
    try:
        metrics_callback(metrics)
    except Exception:
        logger.warning("metrics callback failed (ignored)", exc_info=True)


def insert_rows(
    connection: sqlite3.Connection,
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    *,
    table_name: str = DEFAULT_TABLE_NAME,
    metrics_callback: Callable[[InsertMetrics], None] | None = None,
) -> InsertResult:
    """Insert data rows (header row excluded) into ``table_name``.

    Parameters
    ----------
    connection: open connection returned by ``create_database``
    headers: the header list the table was created from
    rows: data rows, possibly ragged
    table_name: target table
    metrics_callback: receives InsertMetrics after the pass, also when it
        fails. Not invoked when ``rows`` is empty (the function returns early).

    Raises
    ------
    RowInsertError: on the first row that fails, with its 1-based position.
        Rows before it stay committed. ``row_number`` is None when the final
        commit fails.
    """
    column_names = derive_column_names(headers)
    if not rows:
        return InsertResult(inserted_rows=0, column_names=column_names)

    insert_sql = build_insert_sql(headers, table_name)
    width = len(column_names)

    start_time = time.time()
    attempted = 0
    try:
        cursor = connection.cursor()
        try:
            for index, row in enumerate(rows, start=1):
                attempted = index
                try:
                    cursor.execute(insert_sql, fit_row(row, width))
                except sqlite3.Error as e:
                    _commit_partial(connection, index - 1)
                    raise RowInsertError(f"failed to insert row {index}: {e}", row_number=index) from e
        finally:
            cursor.close()
        try:
            connection.commit()
        except sqlite3.Error as e:
            connection.rollback()
            raise RowInsertError(f"failed to commit inserted rows: {e}", row_number=None) from e
    finally:
        _report_metrics(metrics_callback, attempted, start_time)

    logger.debug("inserted rows=%d table=%s", len(rows), table_name)
    return InsertResult(inserted_rows=len(rows), column_names=column_names)


def _commit_partial(connection: sqlite3.Connection, written: int) -> None:
    # The failed statement is already undone; keep the rows before it.
    try:
        connection.commit()
    except sqlite3.Error:
        logger.warning("could not keep %d rows written before the failure", written, exc_info=True)
    else:
        logger.debug("kept rows=%d written before the failure", written)
