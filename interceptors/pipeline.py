"""
Ordered interceptor registries.

A ``Pipeline`` keeps interceptors in registration order.  The effective
execution order (ascending ``order``, stable by registration) is sorted
from a snapshot of the registration list on every read, so a changed
``order`` attribute takes effect on the next parse.  ``freeze()`` locks
the registration list once it is configured.
"""

from __future__ import annotations

import logging
import threading
from typing import Generic, Iterable, Iterator, List, Tuple, TypeVar

from mapping.errors import PipelineFrozenError

logger = logging.getLogger(__name__)

I = TypeVar("I")


class Pipeline(Generic[I]):
    """A mutable, ordered list of interceptors."""

    def __init__(self, interceptors: Iterable[I] = ()) -> None:
        self._lock = threading.Lock()
        self._registered: List[I] = list(interceptors)
        self._frozen = False

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add(self, interceptor: I) -> I:
        with self._lock:
            self._check_mutable()
            self._registered.append(interceptor)
            self._log_order()
        return interceptor

    def extend(self, interceptors: Iterable[I]) -> None:
        with self._lock:
            self._check_mutable()
            self._registered.extend(interceptors)
            self._log_order()

    def remove(self, interceptor: I) -> None:
        """Remove the first registration of *interceptor* (ValueError if absent)."""
        with self._lock:
            self._check_mutable()
            self._registered.remove(interceptor)
            self._log_order()

    def clear(self) -> None:
        with self._lock:
            self._check_mutable()
            self._registered.clear()
            self._log_order()

    def freeze(self) -> "Pipeline[I]":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    @property
    def ordered(self) -> Tuple[I, ...]:
        """Effective execution order, computed from the current ``order`` values."""
        with self._lock:
            snapshot = list(self._registered)
        return self._sorted(snapshot)

    @property
    def registered(self) -> Tuple[I, ...]:
        """Registration order."""
        with self._lock:
            return tuple(self._registered)

    def __iter__(self) -> Iterator[I]:
        return iter(self.ordered)

    def __len__(self) -> int:
        with self._lock:
            return len(self._registered)

    def __contains__(self, interceptor: object) -> bool:
        with self._lock:
            return interceptor in self._registered

    def __repr__(self) -> str:
        return f"Pipeline({list(self.ordered)!r})"

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check_mutable(self) -> None:
        if self._frozen:
            raise PipelineFrozenError("Interceptor pipeline is frozen")

    def _log_order(self) -> None:
        logger.debug(
            "Interceptor order: %s",
            [type(i).__name__ for i in self._sorted(self._registered)],
        )

    @staticmethod
    def _sorted(interceptors: List[I]) -> Tuple[I, ...]:
        # sorted() is stable, so equal orders keep registration order.
        return tuple(sorted(interceptors, key=lambda i: getattr(i, "order", 0)))
