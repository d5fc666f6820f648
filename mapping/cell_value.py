"""
Cell value resolution and column-letter extraction.

A raw cell arrives exactly as stored in the sheet XML.  ``resolve_cell_value``
turns it into the canonical string every interceptor works on:

  - no payload                  -> None (never "")
  - boolean (``t="b"``)         -> "False" for "0", otherwise "True"
  - shared string (``t="s"``)   -> entry of the shared-string table
  - anything else               -> payload unchanged
"""

from __future__ import annotations

import re
from typing import Optional, Sequence

from dto.cell_data import CellType, RawCell
from mapping.errors import (
    ColumnResolutionError,
    MalformedCellReferenceError,
    SharedStringIndexOutOfRangeError,
)

_COLUMN_RE = re.compile(r"[A-Za-z]+")


def column_identifier(reference: Optional[str]) -> str:
    """Return the column letters of an A1-style reference: ``'AB12'`` → ``'AB'``."""
    match = _COLUMN_RE.match(reference or "")
    if match is None:
        raise MalformedCellReferenceError(reference)
    return match.group(0)


def resolve_cell_value(
    cell: RawCell,
    shared_strings: Sequence[str],
) -> Optional[str]:
    text = cell.text
    if text is None:
        return None

    if cell.data_type is CellType.BOOLEAN:
        return "False" if text == "0" else "True"

    if cell.data_type is CellType.SHARED_STRING:
        return _lookup_shared_string(cell.reference, text, shared_strings)

    return text


def _lookup_shared_string(
    reference: str,
    text: str,
    shared_strings: Sequence[str],
) -> str:
    try:
        index = int(text.strip())
    except ValueError:
        raise ColumnResolutionError(
            reference,
            f"Cell {reference} is a shared-string cell but {text!r} is not an index",
        ) from None

    if index < 0 or index >= len(shared_strings):
        raise SharedStringIndexOutOfRangeError(reference, index, len(shared_strings))
    return shared_strings[index]
