"""
Top-level output DTO for the CLI JSON document.

    SheetRecords
      ├─ file_name
      ├─ sheet_name
      └─ records: List[<record type>]
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel


class SheetRecords(BaseModel):
    """Records parsed from a single worksheet."""

    file_name: str
    sheet_name: Optional[str] = None
    record_type: str
    records: List[Any] = []
