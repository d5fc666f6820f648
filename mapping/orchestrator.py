"""
Sheet → list of records.

``ExcelRecordParser`` owns the two interceptor pipelines and drives a
parse:

  1. open the workbook and pick the worksheet (by name, or the first one)
  2. build the column map from the first row
  3. bind every following row, dropping blank ones
  4. wrap any row failure in ``RowProcessingError`` (fail-fast)

The whole result is materialised before it is returned.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Type, TypeVar

from interceptors.base import NameInterceptor, ValueInterceptor
from interceptors.pipeline import Pipeline
from mapping.columns import ColumnMap, build_column_map
from mapping.errors import RowProcessingError, SheetNotFoundError
from mapping.row_binder import RowBinder
from reader.workbook import Source, WorkbookDocument, WorksheetRef

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ExcelRecordParser:
    """
    Parses one worksheet into typed records.

    Interceptors are registered on ``name_interceptors`` and
    ``value_interceptors`` before calling ``parse``.  One parser may be
    shared by several threads as long as the pipelines are not modified
    while parses are running (see ``Pipeline.freeze``).
    """

    def __init__(
        self,
        name_interceptors: Iterable[NameInterceptor] = (),
        value_interceptors: Iterable[ValueInterceptor] = (),
    ) -> None:
        self.name_interceptors: Pipeline[NameInterceptor] = Pipeline(name_interceptors)
        self.value_interceptors: Pipeline[ValueInterceptor] = Pipeline(value_interceptors)

    def freeze(self) -> "ExcelRecordParser":
        """Lock both pipelines against further registration changes."""
        self.name_interceptors.freeze()
        self.value_interceptors.freeze()
        return self

    def parse(
        self,
        record_type: Type[T],
        source: Source,
        sheet_name: Optional[str] = None,
    ) -> List[T]:
        """
        Parse *source* (a path or a binary stream) into ``record_type``
        instances, one per non-blank data row, in sheet order.
        """
        logger.info("Loading workbook: %s", _describe(source))
        with WorkbookDocument(source) as doc:
            worksheet = doc.find_worksheet(sheet_name)
            if worksheet is None:
                logger.error(
                    "Worksheet '%s' not found. Available sheets: %s",
                    sheet_name,
                    doc.sheet_names,
                )
                raise SheetNotFoundError(sheet_name)
            return self._process_sheet(record_type, doc, worksheet)

    def _process_sheet(
        self,
        record_type: Type[T],
        doc: WorkbookDocument,
        worksheet: WorksheetRef,
    ) -> List[T]:
        logger.info("Processing sheet: %s", worksheet.name)
        shared_strings = doc.shared_strings

        records: List[T] = []
        columns: Optional[ColumnMap] = None
        binder: Optional[RowBinder[T]] = None
        skipped = 0

        for row in doc.iter_rows(worksheet):
            if binder is None:
                columns = build_column_map(row, shared_strings, self.name_interceptors)
                binder = RowBinder(record_type, columns, shared_strings, self.value_interceptors)
                logger.info("  -> %d column(s) mapped from header row %d", len(columns), row.index)
                continue

            try:
                record = binder.bind(row)
            except Exception as exc:
                logger.error("Failed to bind row %d of sheet '%s'", row.index, worksheet.name)
                raise RowProcessingError(row.index, exc) from exc

            if record is None:
                skipped += 1
            else:
                records.append(record)

        logger.info(
            "  -> %d %s record(s), %d blank row(s) skipped",
            len(records),
            record_type.__name__,
            skipped,
        )
        return records


def _describe(source: Source) -> str:
    if hasattr(source, "read"):
        name = getattr(source, "name", None)
        return str(name) if name else f"<{type(source).__name__}>"
    return str(source)
