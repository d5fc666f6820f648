"""
Base classes for header-name and cell-value interceptors.

An interceptor is one ordered step of a pipeline:

  1. **NameInterceptor** — rewrites a header cell's text into the
     property name the column binds to.
  2. **ValueInterceptor** — rewrites a cell's string into the value that
     gets bound onto the record.  It sees both the untouched cell string
     and the result of every interceptor that ran before it.

``order`` decides the position inside a pipeline (ascending); equal
orders keep their registration order.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from dto.property_info import PropertyInfo


class NameInterceptor(ABC):
    """Interface that every header-name step must implement."""

    order: int = 0

    @abstractmethod
    def intercept(self, name: str) -> str:
        """Return the transformed header name."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(order={self.order})"


class ValueInterceptor(ABC):
    """Interface that every cell-value step must implement."""

    order: int = 0

    @abstractmethod
    def intercept(
        self,
        prop: PropertyInfo,
        original_value: Optional[str],
        current_value: Any,
    ) -> Any:
        """
        Return the next value for *prop*.

        Args:
            prop: Name and declared type of the target property.
            original_value: The resolved cell string (``None`` for empty cells).
            current_value: Output of the previous interceptor, or
                *original_value* for the first one.
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(order={self.order})"
