from __future__ import annotations

import re

from ..errors import InvalidReferenceError

"""Sheet identifier extraction.

Accepted references, tried in this order (first match wins):
- a URL containing ``/spreadsheets/d/<id>``
- a URL containing a ``key=<id>`` query parameter (legacy sharing links)
- a bare identifier made only of ``[a-zA-Z0-9-_]``

The bare-identifier rule must stay last: a full URL is never a valid identifier
as a whole, but its fragments could be mistaken for one.
"""

__all__ = [
    "extract_sheet_id",
    "SHEET_ID_PATTERN",
]

SHEET_ID_PATTERN = r"[a-zA-Z0-9\-_]+"

_REFERENCE_PATTERNS = (
    re.compile(rf"/spreadsheets/d/({SHEET_ID_PATTERN})"),
    re.compile(rf"key=({SHEET_ID_PATTERN})"),
)
_BARE_ID = re.compile(SHEET_ID_PATTERN)


def extract_sheet_id(reference: str) -> str:
    """Return the sheet identifier contained in ``reference``.

    Raises:
        InvalidReferenceError: If no rule matches.
    """
    for pattern in _REFERENCE_PATTERNS:
        match = pattern.search(reference)
        if match:
            return match.group(1)

    if _BARE_ID.fullmatch(reference):
        return reference

    raise InvalidReferenceError(reference)
