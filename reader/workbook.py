"""
Read-only access to an .xlsx package.

Uses openpyxl's ``ExcelReader`` for the package plumbing (content types,
shared-string table, workbook part, sheet relationships) but does *not*
let openpyxl build worksheets: rows are streamed raw by
``reader.rows.iter_rows`` so the mapping engine sees cells exactly as
stored.
"""

from __future__ import annotations

import logging
import os
from typing import IO, Iterator, List, Optional, Sequence, Union

from openpyxl.reader.excel import ExcelReader

from dto.cell_data import RawRow
from reader.rows import iter_rows

logger = logging.getLogger(__name__)

Source = Union[str, "os.PathLike[str]", IO[bytes]]


class WorksheetRef:
    """Name and package path of one worksheet."""

    def __init__(self, name: str, path: str, position: int) -> None:
        self.name = name
        self.path = path
        self.position = position

    def __repr__(self) -> str:
        return f"WorksheetRef(name={self.name!r}, path={self.path!r})"


class WorkbookDocument:
    """
    An open workbook.  Use as a context manager; the zip archive is
    closed on exit, a caller-supplied stream is left open.
    """

    def __init__(self, source: Source) -> None:
        if isinstance(source, os.PathLike):
            source = os.fspath(source)
        self._reader = ExcelReader(source, read_only=True, keep_links=False)
        try:
            self._reader.read_manifest()
            self._reader.read_strings()
            self._reader.read_workbook()
        except Exception:
            self.close()
            raise
        self._worksheets = self._find_worksheets()

    def __enter__(self) -> "WorkbookDocument":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._reader.archive.close()

    # ------------------------------------------------------------------
    # Sheets
    # ------------------------------------------------------------------

    @property
    def worksheets(self) -> List[WorksheetRef]:
        return list(self._worksheets)

    @property
    def sheet_names(self) -> List[str]:
        return [ws.name for ws in self._worksheets]

    def find_worksheet(self, name: Optional[str] = None) -> Optional[WorksheetRef]:
        """
        Return the first worksheet called *name*, or the first worksheet
        in workbook order when *name* is None.  ``None`` if nothing matches.
        """
        for ws in self._worksheets:
            if name is None or ws.name == name:
                return ws
        return None

    def _find_worksheets(self) -> List[WorksheetRef]:
        found: List[WorksheetRef] = []
        for sheet, rel in self._reader.parser.find_sheets():
            if not rel.Type.endswith("/worksheet"):
                logger.debug("Skipping non-worksheet sheet '%s' (%s)", sheet.name, rel.Type)
                continue
            if rel.target not in self._reader.valid_files:
                logger.warning("Worksheet '%s' points at missing part %s", sheet.name, rel.target)
                continue
            found.append(WorksheetRef(sheet.name, rel.target, len(found)))
        return found

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    @property
    def shared_strings(self) -> Sequence[str]:
        """The shared-string table; empty when the package has none."""
        return self._reader.shared_strings

    def iter_rows(self, worksheet: WorksheetRef) -> Iterator[RawRow]:
        with self._reader.archive.open(worksheet.path) as src:
            yield from iter_rows(src)
