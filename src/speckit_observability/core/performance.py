"""Performance metric recorder with last-value-wins semantics."""

import time
from collections.abc import Awaitable, Callable, Generator
from contextlib import contextmanager
from typing import TypeVar

from speckit_observability.core.logger import Logger
from speckit_observability.core.ports import ConsoleSinkPort, MetricObserver, Unsubscribe
from speckit_observability.core.subscriptions import SubscriptionRegistry

T = TypeVar("T")

DEFAULT_SLOW_THRESHOLD_MS = 1000.0


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


class PerformanceMonitor:
    """Records named numeric metrics and notifies subscribers of each update.

    Only the latest value per name is kept. Names containing "error" or
    "failure" are also logged at WARN; other values above the slow threshold
    are logged at DEBUG.

    Args:
        logger: Logger receiving metric notices.
        sink: Console sink for observer failure diagnostics. Defaults to the
            logger's sink.
        slow_threshold_ms: Values above this are reported as slow operations.
    """

    def __init__(
        self,
        logger: Logger,
        sink: ConsoleSinkPort | None = None,
        *,
        slow_threshold_ms: float = DEFAULT_SLOW_THRESHOLD_MS,
    ) -> None:
        self._logger = logger
        self._slow_threshold_ms = slow_threshold_ms
        self._metrics: dict[str, float] = {}
        self._observers = SubscriptionRegistry(
            sink if sink is not None else logger.sink, "Error in performance observer"
        )

    def subscribe(self, observer: MetricObserver) -> Unsubscribe:
        """Receive ``(name, value)`` for every recorded metric."""
        return self._observers.subscribe(observer)

    def record_metric(self, name: str, value: float) -> None:
        """Store ``value`` under ``name``, replacing any previous value."""
        self._metrics[name] = value
        self._observers.notify(name, value)

        if "error" in name or "failure" in name:
            self._logger.warn(f"Performance metric: {name} = {value}")
        elif value > self._slow_threshold_ms:
            self._logger.debug(f"Performance metric: {name} = {value}ms")

    def get_metric(self, name: str) -> float | None:
        """Return the last value recorded for ``name``, or None if never recorded."""
        return self._metrics.get(name)

    def get_all_metrics(self) -> dict[str, float]:
        return dict(self._metrics)

    def clear_metrics(self) -> None:
        self._metrics.clear()

    async def measure_async(self, name: str, operation: Callable[[], Awaitable[T]]) -> T:
        """Await ``operation()`` and record its wall-clock duration in milliseconds.

        On success ``name`` is recorded and the result returned unchanged. On
        failure ``<name>_error`` gets the duration, ``<name>_failure`` gets 1,
        and the original exception is re-raised.
        """
        start = time.perf_counter()
        try:
            result = await operation()
        except Exception:
            duration = _elapsed_ms(start)
            self.record_metric(f"{name}_error", duration)
            self.record_metric(f"{name}_failure", 1)
            raise
        self.record_metric(name, _elapsed_ms(start))
        return result

    @contextmanager
    def measure(self, name: str) -> Generator[None, None, None]:
        """Time a block of synchronous code with the same recording rules."""
        start = time.perf_counter()
        try:
            yield
        except Exception:
            duration = _elapsed_ms(start)
            self.record_metric(f"{name}_error", duration)
            self.record_metric(f"{name}_failure", 1)
            raise
        self.record_metric(name, _elapsed_ms(start))
