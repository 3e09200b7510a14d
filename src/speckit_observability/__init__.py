"""Structured logging, error taxonomy and performance metrics for Speck-It.

Example:
    ```python
    from speckit_observability import create_observability_hook, handle_error

    hook = create_observability_hook("TaskManager")
    try:
        tasks = await hook.measure_performance("load_tasks", fetch_tasks)
    except Exception as exc:
        app_error = handle_error(exc, {"operation": "load_tasks"})
    ```
"""

from speckit_observability.adapters.console import LoggingConsoleSink, RecordingConsoleSink
from speckit_observability.adapters.logging import ObservabilityHandler
from speckit_observability.config import ObservabilitySettings, get_settings
from speckit_observability.context import (
    Observability,
    get_observability,
    reset_observability,
    set_observability,
)
from speckit_observability.core.errors import (
    AppError,
    ConflictError,
    DatabaseError,
    ErrorKind,
    ForbiddenError,
    NetworkError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from speckit_observability.core.logger import Logger
from speckit_observability.core.models import LogEntry, LogLevel
from speckit_observability.core.performance import PerformanceMonitor
from speckit_observability.core.ports import ConsoleSinkPort
from speckit_observability.handling import handle_error
from speckit_observability.hooks import ObservabilityHook, create_observability_hook

__version__ = "0.1.0"

__all__ = [
    "AppError",
    "ConflictError",
    "ConsoleSinkPort",
    "DatabaseError",
    "ErrorKind",
    "ForbiddenError",
    "LogEntry",
    "LogLevel",
    "Logger",
    "LoggingConsoleSink",
    "NetworkError",
    "NotFoundError",
    "Observability",
    "ObservabilityHandler",
    "ObservabilityHook",
    "ObservabilitySettings",
    "PerformanceMonitor",
    "RecordingConsoleSink",
    "UnauthorizedError",
    "ValidationError",
    "create_observability_hook",
    "get_observability",
    "get_settings",
    "handle_error",
    "reset_observability",
    "set_observability",
]
