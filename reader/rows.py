"""
Row reader for a worksheet part.

Walks ``<sheetData>`` with ``iterparse`` and yields each ``<row>`` as a
``RawRow`` of unresolved ``RawCell`` objects: shared-string cells keep
their index, boolean cells keep ``"0"`` / ``"1"``.  Missing ``r``
attributes are filled in from running row/column counters, the same way
openpyxl's own worksheet parser does.
"""

from __future__ import annotations

import logging
from typing import IO, Iterator, List, Optional

from openpyxl.cell.text import Text
from openpyxl.utils import get_column_letter
from openpyxl.utils.cell import coordinate_from_string, column_index_from_string
from openpyxl.utils.exceptions import CellCoordinatesException
from openpyxl.xml.constants import SHEET_MAIN_NS
from openpyxl.xml.functions import iterparse

from dto.cell_data import CellType, RawCell, RawRow

logger = logging.getLogger(__name__)

ROW_TAG = "{%s}row" % SHEET_MAIN_NS
CELL_TAG = "{%s}c" % SHEET_MAIN_NS
VALUE_TAG = "{%s}v" % SHEET_MAIN_NS
INLINE_STRING_TAG = "{%s}is" % SHEET_MAIN_NS


def iter_rows(source: IO[bytes]) -> Iterator[RawRow]:
    """Yield the rows of a worksheet XML stream in document order."""
    row_counter = 0
    rows_read = 0
    for _, element in iterparse(source):
        if element.tag != ROW_TAG:
            continue

        row_counter = _row_number(element.get("r"), row_counter)
        rows_read += 1
        yield RawRow(index=row_counter, cells=_parse_cells(element, row_counter))
        element.clear()

    logger.debug("Read %d row(s)", rows_read)


def _row_number(attribute: Optional[str], previous: int) -> int:
    if attribute is None:
        return previous + 1
    try:
        return int(attribute)
    except ValueError:
        value = float(attribute)
        if not value.is_integer():
            raise ValueError(f"{attribute} is not a valid row number") from None
        return int(value)


def _parse_cells(row, row_number: int) -> List[RawCell]:
    cells: List[RawCell] = []
    col_counter = 0

    for element in row.iter(CELL_TAG):
        reference = element.get("r")
        if reference:
            # Keep the counter in step so a later cell without ``r`` lands
            # in the next column.  Malformed references are reported by
            # the mapping engine, not here.
            try:
                col_counter = column_index_from_string(coordinate_from_string(reference)[0])
            except (CellCoordinatesException, ValueError):
                col_counter += 1
        else:
            col_counter += 1
            reference = f"{get_column_letter(col_counter)}{row_number}"

        data_type = CellType.from_attribute(element.get("t"))
        if data_type is CellType.INLINE_STRING:
            child = element.find(INLINE_STRING_TAG)
            text = Text.from_tree(child).content if child is not None else None
        else:
            text = element.findtext(VALUE_TAG, None)

        cells.append(RawCell(reference=reference, text=text, data_type=data_type))

    return cells
