"""Observability bundle and the process-wide default instance.

Tests and embedders build their own ``Observability`` with
``Observability.create()``; application code that does not pass one
explicitly shares the bundle returned by ``get_observability()``.
"""

from dataclasses import dataclass

from speckit_observability.adapters.console import LoggingConsoleSink
from speckit_observability.config import ObservabilitySettings, get_settings
from speckit_observability.core.logger import Logger
from speckit_observability.core.performance import PerformanceMonitor
from speckit_observability.core.ports import ConsoleSinkPort

_default: "Observability | None" = None


@dataclass(frozen=True)
class Observability:
    """One logger and one performance monitor sharing a console sink."""

    logger: Logger
    monitor: PerformanceMonitor

    @classmethod
    def create(
        cls,
        settings: ObservabilitySettings | None = None,
        sink: ConsoleSinkPort | None = None,
    ) -> "Observability":
        """Build a fresh bundle.

        Args:
            settings: Startup configuration. Defaults to ``ObservabilitySettings()``
                read from the environment at call time.
            sink: Console sink. Defaults to a LoggingConsoleSink on
                ``settings.console_logger_name``.
        """
        settings = settings or ObservabilitySettings()
        sink = sink or LoggingConsoleSink(settings.console_logger_name)
        logger = Logger(
            sink,
            max_logs=settings.max_logs,
            log_level=settings.default_log_level(),
        )
        monitor = PerformanceMonitor(logger, slow_threshold_ms=settings.slow_threshold_ms)
        return cls(logger=logger, monitor=monitor)


def get_observability() -> Observability:
    """Return the process-wide bundle, creating it from settings on first use."""
    global _default
    if _default is None:
        _default = Observability.create(get_settings())
    return _default


def set_observability(observability: Observability) -> None:
    """Replace the process-wide bundle."""
    global _default
    _default = observability


def reset_observability() -> None:
    """Drop the process-wide bundle so the next access rebuilds it."""
    global _default
    _default = None
