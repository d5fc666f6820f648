"""
Header-name and cell-value interceptors.

Each interceptor implements ``NameInterceptor`` or ``ValueInterceptor``
and is registered on a ``Pipeline``; the pipeline runs them in
ascending ``order``.
"""

from interceptors.base import NameInterceptor, ValueInterceptor
from interceptors.pipeline import Pipeline
from interceptors.names import (
    AliasInterceptor,
    CallableNameInterceptor,
    PascalCaseInterceptor,
    SnakeCaseInterceptor,
    StripWhitespaceInterceptor,
)
from interceptors.values import (
    BlankToNoneInterceptor,
    CallableValueInterceptor,
    ExcelDateInterceptor,
    TypeConversionInterceptor,
)

__all__ = [
    "NameInterceptor",
    "ValueInterceptor",
    "Pipeline",
    "AliasInterceptor",
    "CallableNameInterceptor",
    "PascalCaseInterceptor",
    "SnakeCaseInterceptor",
    "StripWhitespaceInterceptor",
    "BlankToNoneInterceptor",
    "CallableValueInterceptor",
    "ExcelDateInterceptor",
    "TypeConversionInterceptor",
]
