"""Per-component observability hooks.

A hook prefixes every log message and metric name with its component name
and delegates to the logger and performance monitor::

    hook = create_observability_hook("TaskManager")
    hook.log_event("tasks loaded", {"count": 3})
    tasks = await hook.measure_performance("load_tasks", fetch_tasks)
    hook.track_metric("visible_tasks", 3)   # metric "TaskManager_visible_tasks"
"""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from speckit_observability.context import Observability, get_observability
from speckit_observability.core.errors import error_message

T = TypeVar("T")


@dataclass(frozen=True)
class ObservabilityHook:
    """Functions bound to one component name.

    Holds no state of its own; two hooks for the same component report
    under the same log prefix and metric names.
    """

    component_name: str
    observability: Observability

    def log_event(self, event: str, data: Mapping[str, Any] | None = None) -> None:
        self.observability.logger.info(
            f"[{self.component_name}] {event}",
            {"component": self.component_name, **(data or {})},
        )

    def log_error(self, error: BaseException, context: Mapping[str, Any] | None = None) -> None:
        self.observability.logger.error(
            f"[{self.component_name}] {error_message(error)}",
            {"component": self.component_name, **(context or {})},
            error,
        )

    async def measure_performance(self, operation: str, fn: Callable[[], Awaitable[T]]) -> T:
        return await self.observability.monitor.measure_async(
            f"{self.component_name}_{operation}", fn
        )

    def track_metric(self, metric: str, value: float) -> None:
        self.observability.monitor.record_metric(f"{self.component_name}_{metric}", value)


def create_observability_hook(
    component_name: str, *, observability: Observability | None = None
) -> ObservabilityHook:
    """Create a hook for ``component_name``.

    Args:
        component_name: Prefix for log messages and metric names.
        observability: Bundle to report to. Defaults to the process-wide one.
    """
    return ObservabilityHook(component_name, observability or get_observability())
