from __future__ import annotations

import sqlite3
from contextlib import closing
from pathlib import Path

import pandas as pd

from .naming import quote_identifier
from .schema import DEFAULT_TABLE_NAME

"""Read-back helpers for a converted database (used by ``--inspect``)."""

__all__ = [
    "read_table",
]


def read_table(
    path: str | Path, table_name: str = DEFAULT_TABLE_NAME, limit: int | None = None
) -> pd.DataFrame:
    """Load the converted table into a DataFrame ordered by the identity column.

    Every sheet column is TEXT, so values come back as ``str`` (``object`` dtype).
    """
    query = f"SELECT * FROM {quote_identifier(table_name)} ORDER BY rowid"
    params: tuple[int, ...] = ()
    if limit is not None:
        query += " LIMIT ?"
        params = (limit,)
    with closing(sqlite3.connect(Path(path))) as conn:
        return pd.read_sql_query(query, conn, params=params)
