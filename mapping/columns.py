"""
Header row → column map.

The first row of a sheet names the columns.  Every header cell is
resolved, run through the name pipeline and stored as
``column letters -> property name``.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, Mapping, Sequence

from dto.cell_data import RawRow
from interceptors.base import NameInterceptor
from interceptors.pipeline import Pipeline
from mapping.cell_value import column_identifier, resolve_cell_value
from mapping.errors import DuplicateHeaderColumnError, InterceptorError

logger = logging.getLogger(__name__)


class ColumnMap(Mapping[str, str]):
    """Read-only ``ColumnIdentifier -> property name`` table."""

    def __init__(self, columns: Mapping[str, str]) -> None:
        self._columns: Dict[str, str] = dict(columns)

    def __getitem__(self, column: str) -> str:
        return self._columns[column]

    def __iter__(self) -> Iterator[str]:
        return iter(self._columns)

    def __len__(self) -> int:
        return len(self._columns)

    def __repr__(self) -> str:
        return f"ColumnMap({self._columns!r})"


def apply_name_interceptors(
    name: str,
    interceptors: Pipeline[NameInterceptor],
    column: str,
) -> str:
    """Fold *name* through every name interceptor in pipeline order."""
    original = name
    for interceptor in interceptors.ordered:
        try:
            name = interceptor.intercept(name)
        except Exception as exc:
            raise InterceptorError(interceptor, original, name, column=column) from exc
    return name


def build_column_map(
    header: RawRow,
    shared_strings: Sequence[str],
    name_interceptors: Pipeline[NameInterceptor],
) -> ColumnMap:
    columns: Dict[str, str] = {}

    for cell in header.cells:
        column = column_identifier(cell.reference)
        if column in columns:
            raise DuplicateHeaderColumnError(column, cell.reference)

        raw_name = resolve_cell_value(cell, shared_strings)
        columns[column] = apply_name_interceptors(
            raw_name if raw_name is not None else "",
            name_interceptors,
            column,
        )

    logger.debug("Column map from row %d: %s", header.index, columns)
    return ColumnMap(columns)
