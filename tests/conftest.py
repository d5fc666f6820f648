"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import openpyxl
import pytest

from xlsx_builder import cell, row, write_raw_xlsx


# ---------------------------------------------------------------------------
# Workbook factories
# ---------------------------------------------------------------------------

@pytest.fixture
def raw_xlsx(tmp_path: Path) -> Callable[..., Path]:
    """Factory for hand-built workbooks (shared strings, boolean tags, ...)."""
    counter = {"n": 0}

    def _build(
        sheets: Sequence[Tuple[str, str]],
        shared_strings: Optional[Sequence[str]] = None,
        chartsheets: Sequence[str] = (),
    ) -> Path:
        counter["n"] += 1
        return write_raw_xlsx(
            tmp_path / f"raw_{counter['n']}.xlsx", sheets, shared_strings, chartsheets
        )

    return _build


@pytest.fixture
def openpyxl_xlsx(tmp_path: Path) -> Callable[..., Path]:
    """Factory for workbooks written by openpyxl from ``{sheet: rows}``."""
    counter = {"n": 0}

    def _build(sheets: Dict[str, List[List[Any]]]) -> Path:
        wb = openpyxl.Workbook()
        wb.remove(wb.active)
        for name, rows in sheets.items():
            ws = wb.create_sheet(name)
            for r in rows:
                ws.append(r)
        counter["n"] += 1
        path = tmp_path / f"book_{counter['n']}.xlsx"
        wb.save(path)
        return path

    return _build


@pytest.fixture
def people_xlsx(raw_xlsx) -> Path:
    """
    Header "First Name" | "Age" | "Active" held in the shared-string table,
    one populated row, one blank row, one row with an extra unmapped column.
    """
    sheet_data = (
        row(1, cell("A1", "0", "s"), cell("B1", "1", "s"), cell("C1", "2", "s"))
        + row(2, cell("A2", "3", "s"), cell("B2", "30"), cell("C2", "1", "b"))
        + row(3)
        + row(4, cell("A4", "4", "s"), cell("B4", "41"), cell("C4", "0", "b"), cell("D4", "ignored", "inlineStr"))
    )
    return raw_xlsx(
        [("People", sheet_data)],
        shared_strings=["First Name", "Age", "Active", "John", "Jane"],
    )
