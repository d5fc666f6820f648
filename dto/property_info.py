"""
Metadata about a single bindable property of a record type.

Value interceptors receive a ``PropertyInfo`` so they can decide how to
convert a cell string without inspecting the record class themselves.
"""

from __future__ import annotations

import typing
from decimal import Decimal
from typing import Any, Optional, Tuple

from pydantic import BaseModel

# Types whose zero value is not None.  Everything else (str, date,
# Optional[...], nested models) defaults to None.
_ZERO_VALUES = {
    bool: False,
    int: 0,
    float: 0.0,
    complex: 0j,
    Decimal: Decimal(0),
}


def unwrap_optional(annotation: Any) -> Tuple[Any, bool]:
    """
    Return ``(inner_type, nullable)`` for *annotation*.

    ``Optional[int]`` and ``int | None`` give ``(int, True)``; unions of
    several non-None members are returned unchanged.  ``Annotated[...]``
    metadata is dropped.
    """
    if typing.get_origin(annotation) is typing.Annotated:
        annotation = typing.get_args(annotation)[0]
    args = typing.get_args(annotation)
    if args and type(None) in args:
        members = [a for a in args if a is not type(None)]
        if len(members) == 1:
            return members[0], True
        return annotation, True
    return annotation, False


def zero_value_for(annotation: Any) -> Any:
    """The zero/default value of *annotation*, ``None`` for nullable types."""
    inner, nullable = unwrap_optional(annotation)
    if nullable:
        return None
    return _ZERO_VALUES.get(inner)


class PropertyInfo(BaseModel):
    """Name and declared type of a record property."""

    name: str
    annotation: Any = None
    alias: Optional[str] = None

    model_config = {"arbitrary_types_allowed": True, "frozen": True}

    @property
    def target_type(self) -> Any:
        """Declared type with any ``Optional[...]`` wrapper removed."""
        return unwrap_optional(self.annotation)[0]

    @property
    def nullable(self) -> bool:
        return unwrap_optional(self.annotation)[1]

    @property
    def zero_value(self) -> Any:
        return zero_value_for(self.annotation)

    def is_meaningful(self, value: Any) -> bool:
        """True when *value* differs from this property's zero value."""
        if value is None:
            return False
        zero = self.zero_value
        if zero is None:
            return True
        return value != zero
