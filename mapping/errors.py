"""
Exception hierarchy for sheet-to-record parsing.

Every failure is raised once where it happens, carrying its local
context (cell, column, property, interceptor), and wrapped once more in
``RowProcessingError`` by the orchestrator when it happens while a data
row is being bound.  The original error stays reachable via
``__cause__``.
"""

from __future__ import annotations

from typing import Any, Optional


class SheetParserError(Exception):
    """Base exception for all parser errors."""


class PipelineFrozenError(SheetParserError):
    """An interceptor pipeline was modified after ``freeze()``."""


class SheetNotFoundError(SheetParserError):
    """The requested worksheet does not exist in the workbook."""

    def __init__(self, sheet_name: Optional[str]) -> None:
        self.sheet_name = sheet_name
        if sheet_name is None:
            message = "Workbook contains no worksheets"
        else:
            message = f"Worksheet '{sheet_name}' not found in workbook"
        super().__init__(message)


class ColumnResolutionError(SheetParserError):
    """A cell's reference or value could not be resolved."""

    def __init__(self, reference: Optional[str], message: str) -> None:
        self.reference = reference
        super().__init__(message)


class MalformedCellReferenceError(ColumnResolutionError):
    """A cell address does not start with a column letter."""

    def __init__(self, reference: Optional[str]) -> None:
        super().__init__(
            reference, f"Malformed cell reference {reference!r}: no column letters"
        )


class SharedStringIndexOutOfRangeError(ColumnResolutionError):
    """A shared-string cell points past the end of the shared-string table."""

    def __init__(self, reference: str, index: int, table_size: int) -> None:
        self.index = index
        self.table_size = table_size
        super().__init__(
            reference,
            f"Cell {reference} refers to shared string {index} "
            f"but the table only holds {table_size} entries",
        )


class DuplicateHeaderColumnError(SheetParserError):
    """Two header cells resolved to the same column identifier."""

    def __init__(self, column: str, reference: str) -> None:
        self.column = column
        self.reference = reference
        super().__init__(
            f"Header cell {reference} repeats column {column}"
        )


class PropertyNotFoundError(SheetParserError):
    """A mapped column has no matching property on the record type."""

    def __init__(self, column: str, property_name: str, record_type: type) -> None:
        self.column = column
        self.property_name = property_name
        self.record_type = record_type
        super().__init__(
            f"Unable to find property to match column {column} for which we "
            f"expect property name {property_name!r} on {record_type.__name__}"
        )


class InterceptorError(SheetParserError):
    """A name or value interceptor raised while transforming a value."""

    def __init__(
        self,
        interceptor: Any,
        original_value: Any,
        current_value: Any,
        column: Optional[str] = None,
        property_name: Optional[str] = None,
    ) -> None:
        self.interceptor = interceptor
        self.interceptor_name = type(interceptor).__name__
        self.original_value = original_value
        self.current_value = current_value
        self.column = column
        self.property_name = property_name

        target = ""
        if column is not None:
            target = f" on column {column}"
        if property_name is not None:
            target += f" targeting property {property_name!r}"
        super().__init__(
            f"Error in interceptor {self.interceptor_name}{target} with "
            f"current value <{current_value!r}> and original value <{original_value!r}>"
        )


class RowProcessingError(SheetParserError):
    """Any failure while binding a data row, tagged with the row number."""

    def __init__(self, row_index: int, cause: BaseException) -> None:
        self.row_index = row_index
        self.cause = cause
        super().__init__(f"Error on row {row_index}: {cause}")
