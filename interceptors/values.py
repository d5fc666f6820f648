"""
Stock cell-value interceptors.

Cells always reach the value pipeline as strings (or None), so a typical
pipeline is:

    BlankToNoneInterceptor   (order -100)  "   "   -> None
    ExcelDateInterceptor     (order  -10)  "45000" -> date(2023, 3, 15)
    TypeConversionInterceptor(order  100)  "30"    -> 30
"""

from __future__ import annotations

import datetime
import math
from functools import lru_cache
from typing import Any, Callable, Optional

from openpyxl.utils.datetime import WINDOWS_EPOCH, from_excel
from pydantic import TypeAdapter

from dto.property_info import PropertyInfo
from interceptors.base import ValueInterceptor


@lru_cache(maxsize=256)
def _cached_adapter(annotation: Any) -> TypeAdapter:
    return TypeAdapter(annotation)


def _adapter_for(annotation: Any) -> TypeAdapter:
    try:
        hash(annotation)
    except TypeError:
        # e.g. Annotated[...] carrying a dict or list as metadata
        return TypeAdapter(annotation)
    return _cached_adapter(annotation)


class BlankToNoneInterceptor(ValueInterceptor):
    """Turn empty or whitespace-only strings into None."""

    def __init__(self, order: int = -100) -> None:
        self.order = order

    def intercept(self, prop: PropertyInfo, original_value: Optional[str], current_value: Any) -> Any:
        if isinstance(current_value, str) and not current_value.strip():
            return None
        return current_value


class ExcelDateInterceptor(ValueInterceptor):
    """
    Convert Excel serial numbers into ``date`` / ``datetime`` / ``time``
    for properties declared with one of those types.

    Dates are stored as plain numbers in the sheet XML; the number format
    that makes Excel display them as dates lives in the stylesheet, which
    the parser does not read.  Strings that are not numbers (ISO dates
    typed as text) are left for ``TypeConversionInterceptor``.
    """

    _TARGETS = (datetime.datetime, datetime.date, datetime.time)

    def __init__(self, order: int = -10, epoch: datetime.datetime = WINDOWS_EPOCH) -> None:
        self.order = order
        self.epoch = epoch

    def intercept(self, prop: PropertyInfo, original_value: Optional[str], current_value: Any) -> Any:
        target = prop.target_type
        if target not in self._TARGETS or not isinstance(current_value, str):
            return current_value

        try:
            serial = float(current_value)
        except ValueError:
            return current_value
        if not math.isfinite(serial):
            return current_value

        converted = from_excel(serial, self.epoch)
        if target is datetime.datetime:
            if isinstance(converted, datetime.time):
                return datetime.datetime.combine(self.epoch.date(), converted)
            return converted
        if target is datetime.date:
            if isinstance(converted, datetime.time):
                return self.epoch.date()
            return converted.date()
        # datetime.time
        if isinstance(converted, datetime.datetime):
            return converted.time()
        return converted


class TypeConversionInterceptor(ValueInterceptor):
    """
    Coerce the current value to the property's declared type using
    pydantic's lax validation ("30" -> 30, "True" -> True,
    "2024-01-31" -> date(2024, 1, 31)).

    None passes through untouched; a value that cannot be converted
    raises ``pydantic.ValidationError``.
    """

    def __init__(self, order: int = 100) -> None:
        self.order = order

    def intercept(self, prop: PropertyInfo, original_value: Optional[str], current_value: Any) -> Any:
        if current_value is None or prop.annotation is None:
            return current_value
        target = prop.target_type
        if target is Any:
            return current_value
        return _adapter_for(prop.annotation).validate_python(current_value)


class CallableValueInterceptor(ValueInterceptor):
    """Wrap a plain ``(prop, original, current) -> value`` function."""

    def __init__(
        self,
        func: Callable[[PropertyInfo, Optional[str], Any], Any],
        order: int = 0,
    ) -> None:
        self.func = func
        self.order = order

    def intercept(self, prop: PropertyInfo, original_value: Optional[str], current_value: Any) -> Any:
        return self.func(prop, original_value, current_value)

    def __repr__(self) -> str:
        func_name = getattr(self.func, "__name__", repr(self.func))
        return f"{type(self).__name__}({func_name}, order={self.order})"
