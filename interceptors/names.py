"""
Stock header-name interceptors.

Header text in real workbooks is written for people ("First Name",
"Date of Birth (UTC)"); these steps turn it into identifiers that match
record fields.
"""

from __future__ import annotations

import re
from typing import Callable, Dict, List

from interceptors.base import NameInterceptor

_WHITESPACE_RE = re.compile(r"\s+")
_NON_WORD_RE = re.compile(r"[^\w\s]")
# Boundaries inside camelCase / PascalCase words: "firstName" -> "first Name"
_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def _words(name: str) -> List[str]:
    cleaned = _NON_WORD_RE.sub(" ", name).replace("_", " ")
    cleaned = _CAMEL_BOUNDARY_RE.sub(" ", cleaned)
    return cleaned.split()


class StripWhitespaceInterceptor(NameInterceptor):
    """Remove every whitespace character: ``"First Name"`` → ``"FirstName"``."""

    def __init__(self, order: int = 0) -> None:
        self.order = order

    def intercept(self, name: str) -> str:
        return _WHITESPACE_RE.sub("", name)


class PascalCaseInterceptor(NameInterceptor):
    """``"first name"`` / ``"first_name"`` → ``"FirstName"``."""

    def __init__(self, order: int = 0) -> None:
        self.order = order

    def intercept(self, name: str) -> str:
        return "".join(w[:1].upper() + w[1:] for w in _words(name))


class SnakeCaseInterceptor(NameInterceptor):
    """``"First Name"`` / ``"FirstName"`` → ``"first_name"``."""

    def __init__(self, order: int = 0) -> None:
        self.order = order

    def intercept(self, name: str) -> str:
        return "_".join(w.lower() for w in _words(name))


class AliasInterceptor(NameInterceptor):
    """
    Rename headers through an explicit table; names not in the table pass
    through unchanged.  Lookups are exact unless *case_sensitive* is False.
    """

    def __init__(
        self,
        aliases: Dict[str, str],
        order: int = 0,
        case_sensitive: bool = True,
    ) -> None:
        self.order = order
        self.case_sensitive = case_sensitive
        if case_sensitive:
            self.aliases = dict(aliases)
        else:
            self.aliases = {k.casefold(): v for k, v in aliases.items()}

    def intercept(self, name: str) -> str:
        key = name if self.case_sensitive else name.casefold()
        return self.aliases.get(key, name)


class CallableNameInterceptor(NameInterceptor):
    """Wrap a plain ``str -> str`` function."""

    def __init__(self, func: Callable[[str], str], order: int = 0) -> None:
        self.func = func
        self.order = order

    def intercept(self, name: str) -> str:
        return self.func(name)

    def __repr__(self) -> str:
        func_name = getattr(self.func, "__name__", repr(self.func))
        return f"{type(self).__name__}({func_name}, order={self.order})"
