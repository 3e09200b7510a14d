"""Ordered observer registry with per-observer fault isolation."""

import itertools
from collections.abc import Callable
from typing import Any

from speckit_observability.core.ports import ConsoleSinkPort, Unsubscribe


class SubscriptionRegistry:
    """Registry of observer callbacks, notified in registration order.

    Each subscription gets its own handle, so the same callable subscribed
    twice is two independent subscriptions. An observer that raises is
    reported to the sink and the remaining observers still run. The report
    is a single ``error`` line, ``"<diagnostic>: <repr of the exception>"``,
    for example ``"Error in log observer: ValueError('bad')"``.

    Args:
        sink: Console sink receiving observer failure diagnostics.
        diagnostic: Fixed message prefix for those diagnostics.
    """

    def __init__(self, sink: ConsoleSinkPort, diagnostic: str) -> None:
        self._sink = sink
        self._diagnostic = diagnostic
        self._observers: dict[int, Callable[..., Any]] = {}
        self._handles = itertools.count()

    def __len__(self) -> int:
        return len(self._observers)

    def subscribe(self, observer: Callable[..., Any]) -> Unsubscribe:
        """Register an observer and return a function that removes it.

        Raises:
            TypeError: If observer is not callable.
        """
        if not callable(observer):
            raise TypeError("observer must be callable")
        handle = next(self._handles)
        self._observers[handle] = observer

        def unsubscribe() -> None:
            self._observers.pop(handle, None)

        return unsubscribe

    def notify(self, *args: Any) -> None:
        """Call every observer registered when notification starts."""
        for observer in list(self._observers.values()):
            try:
                observer(*args)
            except Exception as exc:
                self._sink.error(f"{self._diagnostic}: {exc!r}")
