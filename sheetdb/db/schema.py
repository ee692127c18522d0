from __future__ import annotations

import logging
import sqlite3
from collections.abc import Sequence
from pathlib import Path

from ..errors import StoreCreationError
from .naming import IDENTITY_COLUMN, derive_column_names, quote_identifier

"""Destination store creation.

The destination file is replaced, not merged: any existing file at the path is
deleted before the new database is created. Concurrent conversions into the same
path are therefore unsafe and must be serialized by the caller.
"""

__all__ = [
    "DEFAULT_TABLE_NAME",
    "build_create_table_sql",
    "create_database",
]

logger = logging.getLogger(__name__)

DEFAULT_TABLE_NAME = "walkthrough_data"


def build_create_table_sql(headers: Sequence[str], table_name: str = DEFAULT_TABLE_NAME) -> str:
    """Return the CREATE TABLE statement for ``headers`` (identity column first)."""
    columns = [f"{quote_identifier(IDENTITY_COLUMN)} INTEGER PRIMARY KEY AUTOINCREMENT"]
    columns.extend(f"{quote_identifier(name)} TEXT" for name in derive_column_names(headers))
    body = ",\n  ".join(columns)
    return f"CREATE TABLE {quote_identifier(table_name)} (\n  {body}\n)"


def create_database(
    path: str | Path,
    headers: Sequence[str],
    *,
    table_name: str = DEFAULT_TABLE_NAME,
) -> sqlite3.Connection:
    """Create a fresh SQLite database at ``path`` holding one table for ``headers``.

    The caller owns the returned connection and must close it.

    Raises:
        StoreCreationError: If the path cannot be cleared or opened, or the
            CREATE TABLE statement fails. An opened connection is closed first.
    """
    db_path = Path(path)
    try:
        if db_path.exists() or db_path.is_symlink():
            db_path.unlink()
            logger.debug("removed existing database path=%s", db_path)
    except OSError as e:
        raise StoreCreationError(f"failed to remove existing database: {e}", path=str(db_path)) from e

    try:
        conn = sqlite3.connect(db_path)
    except sqlite3.Error as e:
        raise StoreCreationError(f"failed to create database: {e}", path=str(db_path)) from e

    create_sql = build_create_table_sql(headers, table_name)
    try:
        conn.execute(create_sql)
        conn.commit()
    except sqlite3.Error as e:
        conn.close()
        raise StoreCreationError(f"failed to create table: {e}", path=str(db_path)) from e

    logger.debug("created table=%s columns=%d path=%s", table_name, len(headers), db_path)
    return conn
