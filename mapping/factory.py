from typing import Optional

from interceptors.base import NameInterceptor
from interceptors.names import (
    PascalCaseInterceptor,
    SnakeCaseInterceptor,
    StripWhitespaceInterceptor,
)
from interceptors.values import (
    BlankToNoneInterceptor,
    ExcelDateInterceptor,
    TypeConversionInterceptor,
)
from mapping import constants
from mapping.orchestrator import ExcelRecordParser


def _make_name_interceptor(style: str) -> Optional[NameInterceptor]:
    """Instantiate the stock name interceptor for a style name."""
    style = style.lower().strip()
    if style == "snake":
        return SnakeCaseInterceptor()
    if style == "pascal":
        return PascalCaseInterceptor()
    if style == "strip":
        return StripWhitespaceInterceptor()
    if style == "none":
        return None
    raise ValueError(f"Unknown name style: {style!r}")


def create_default_parser(
    name_style: Optional[str] = None,
    blank_as_none: Optional[bool] = None,
) -> ExcelRecordParser:
    """
    Return an ``ExcelRecordParser`` with the stock interceptors registered.

    The header style is chosen via the RECORD_PARSER_NAME_STYLE env var
    unless *name_style* is given:
      - "snake"  → SnakeCaseInterceptor       (default, "First Name" → "first_name")
      - "pascal" → PascalCaseInterceptor      ("First Name" → "FirstName")
      - "strip"  → StripWhitespaceInterceptor ("First Name" → "FirstName")
      - "none"   → header text used as-is

    Value interceptors: BlankToNone (unless RECORD_PARSER_BLANK_AS_NONE is
    false), ExcelDate, TypeConversion.
    """
    parser = ExcelRecordParser()

    name_interceptor = _make_name_interceptor(name_style or constants.NAME_STYLE)
    if name_interceptor is not None:
        parser.name_interceptors.add(name_interceptor)

    if blank_as_none is None:
        blank_as_none = constants.BLANK_AS_NONE
    if blank_as_none:
        parser.value_interceptors.add(BlankToNoneInterceptor())
    parser.value_interceptors.add(ExcelDateInterceptor())
    parser.value_interceptors.add(TypeConversionInterceptor())
    return parser
