"""Port interfaces for the observability core.

The core depends only on these interfaces. Concrete sinks live in
``speckit_observability.adapters.console``.
"""

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from speckit_observability.core.models import LogEntry

LogObserver = Callable[[LogEntry], None]
MetricObserver = Callable[[str, float], None]
Unsubscribe = Callable[[], None]


@runtime_checkable
class ConsoleSinkPort(Protocol):
    """Port for console-style text output.

    One channel per severity band. Each call receives a single formatted
    line. Examples: LoggingConsoleSink, RecordingConsoleSink.
    """

    def debug(self, line: str) -> None:
        """Write a debug line."""
        ...

    def info(self, line: str) -> None:
        """Write an informational line."""
        ...

    def warn(self, line: str) -> None:
        """Write a warning line."""
        ...

    def error(self, line: str) -> None:
        """Write an error line (also used for fatal entries and stacks)."""
        ...
