"""
Raw cell DTOs handed from the document reader to the mapping engine.

Values are kept exactly as stored in the worksheet XML: shared-string
cells carry the *index* into the workbook's shared-string table and
boolean cells carry ``"0"`` / ``"1"``.  Resolution happens later in
``mapping.cell_value``.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class CellType(str, Enum):
    """The ``t`` attribute of a ``<c>`` element, reduced to what we care about."""

    BOOLEAN = "b"
    SHARED_STRING = "s"
    INLINE_STRING = "inlineStr"
    OTHER = "other"

    @classmethod
    def from_attribute(cls, value: Optional[str]) -> Optional["CellType"]:
        if value is None:
            return None
        for member in cls:
            if member.value == value:
                return member
        return cls.OTHER


class RawCell(BaseModel):
    reference: str                       # e.g. "C7"
    text: Optional[str] = None           # <v> payload (or <is> text for inline strings)
    data_type: Optional[CellType] = None # None when the cell has no ``t`` attribute


class RawRow(BaseModel):
    """One ``<row>`` of ``<sheetData>`` in document order."""

    index: int                           # 1-based sheet row number
    cells: List[RawCell] = []
