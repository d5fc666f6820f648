"""
Data row → record.

``RowBinder.bind`` returns a fully populated record, or ``None`` when no
mapped cell produced a value different from its property's zero value
(a blank row).  Records are never handed out half-bound: any failure
raises before the record leaves this module.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, Optional, Sequence, Type, TypeVar

from dto.cell_data import RawCell, RawRow
from dto.property_info import PropertyInfo
from interceptors.base import ValueInterceptor
from interceptors.pipeline import Pipeline
from mapping.binding import RecordBinding
from mapping.cell_value import column_identifier, resolve_cell_value
from mapping.columns import ColumnMap
from mapping.errors import InterceptorError, PropertyNotFoundError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def apply_value_interceptors(
    prop: PropertyInfo,
    original_value: Optional[str],
    interceptors: Pipeline[ValueInterceptor],
    column: Optional[str] = None,
) -> Any:
    """Fold *original_value* through every value interceptor in pipeline order."""
    current: Any = original_value
    for interceptor in interceptors.ordered:
        try:
            current = interceptor.intercept(prop, original_value, current)
        except Exception as exc:
            raise InterceptorError(
                interceptor,
                original_value,
                current,
                column=column,
                property_name=prop.name,
            ) from exc
    return current


class RowBinder(Generic[T]):
    """Binds data rows of one sheet onto instances of ``record_type``."""

    def __init__(
        self,
        record_type: Type[T],
        columns: ColumnMap,
        shared_strings: Sequence[str],
        value_interceptors: Pipeline[ValueInterceptor],
    ) -> None:
        self.record_type = record_type
        self.columns = columns
        self.shared_strings = shared_strings
        self.value_interceptors = value_interceptors
        self._binding = RecordBinding.for_type(record_type)

    def bind(self, row: RawRow) -> Optional[T]:
        record = self._binding.create()
        any_data_set = False

        for cell in row.cells:
            column = column_identifier(cell.reference)
            if column not in self.columns:
                continue
            any_data_set |= self._bind_cell(record, column, cell)

        if not any_data_set:
            logger.debug("Row %d is blank, skipping", row.index)
            return None
        return record

    def _bind_cell(self, record: T, column: str, cell: RawCell) -> bool:
        property_name = self.columns[column]
        original_value = resolve_cell_value(cell, self.shared_strings)

        prop = self._binding.find(property_name)
        if prop is None:
            raise PropertyNotFoundError(column, property_name, self.record_type)

        value = apply_value_interceptors(
            prop, original_value, self.value_interceptors, column=column
        )
        self._binding.assign(record, prop, value)
        return prop.is_meaningful(value)
