from __future__ import annotations

import re
from collections.abc import Iterable

"""Column name sanitization shared by table creation and row insertion.

Both call sites must produce the same column list for the same headers, so they
both go through ``derive_column_names`` and nothing else.
"""

__all__ = [
    "IDENTITY_COLUMN",
    "UNNAMED_COLUMN",
    "derive_column_names",
    "quote_identifier",
    "sanitize_column_name",
]

IDENTITY_COLUMN = "id"
UNNAMED_COLUMN = "unnamed_column"

_INVALID_CHARS = re.compile(r"[^a-zA-Z0-9_]")
_UNDERSCORE_RUN = re.compile(r"_+")


def sanitize_column_name(header: str) -> str:
    """Map arbitrary header text to ``[a-zA-Z0-9_]+`` without a leading digit.

    >>> sanitize_column_name("2nd Col")
    'col_2nd_Col'
    >>> sanitize_column_name("  ")
    'unnamed_column'
    """
    name = _INVALID_CHARS.sub("_", header)
    name = _UNDERSCORE_RUN.sub("_", name)
    name = name.strip("_")
    if name and name[0].isdigit():
        name = "col_" + name
    if not name:
        name = UNNAMED_COLUMN
    return name


def derive_column_names(headers: Iterable[str]) -> list[str]:
    """Sanitize and de-duplicate an ordered header list.

    The Nth occurrence (N >= 2) of a sanitized base name gets ``_N`` appended.
    SQLite compares column names case-insensitively and the identity column
    ``id`` is always present, so a candidate that clashes with an already used
    name (ignoring case) keeps counting up until it is free.

    >>> derive_column_names(["Name", "Name", "2nd Col"])
    ['Name', 'Name_2', 'col_2nd_Col']
    """
    seen: dict[str, int] = {}
    used: set[str] = {IDENTITY_COLUMN}
    names: list[str] = []
    for header in headers:
        base = sanitize_column_name(header)
        count = seen.get(base, 0) + 1
        name = base if count == 1 else f"{base}_{count}"
        while name.lower() in used:
            count += 1
            name = f"{base}_{count}"
        seen[base] = count
        used.add(name.lower())
        names.append(name)
    return names


def quote_identifier(name: str) -> str:
    """Quote a SQLite identifier (double quotes, embedded quotes doubled)."""
    return '"' + name.replace('"', '""') + '"'
