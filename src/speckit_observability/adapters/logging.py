"""Python logging handler adapter.

This adapter bridges Python's standard library logging module into a
``Logger``, so records from third-party libraries land in the same ring
buffer, subscribers and exports as application logs.
"""

import logging

from speckit_observability.adapters.console import DEFAULT_CONSOLE_LOGGER
from speckit_observability.core.logger import Logger
from speckit_observability.core.models import LogLevel

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)


def level_for_record(levelno: int) -> LogLevel:
    """Map a stdlib level number onto the nearest LogLevel at or below it."""
    if levelno >= logging.CRITICAL:
        return LogLevel.FATAL
    if levelno >= logging.ERROR:
        return LogLevel.ERROR
    if levelno >= logging.WARNING:
        return LogLevel.WARN
    if levelno >= logging.INFO:
        return LogLevel.INFO
    return LogLevel.DEBUG


class ObservabilityHandler(logging.Handler):
    """Logging handler that forwards log records to a Logger.

    Records emitted by the console sink's own logger are skipped, so the
    handler can sit on the root logger without feeding lines back in.

    Example:
        ```python
        from speckit_observability import ObservabilityHandler, get_observability

        handler = ObservabilityHandler(get_observability().logger)
        logging.getLogger().addHandler(handler)
        ```
    """

    def __init__(
        self,
        target: Logger,
        ignore_loggers: tuple[str, ...] = (DEFAULT_CONSOLE_LOGGER,),
    ) -> None:
        """Initialize the handler with a target logger.

        Args:
            target: Logger receiving the forwarded entries.
            ignore_loggers: Logger names (and their children) never forwarded.
        """
        super().__init__()
        self._target = target
        self._ignore_loggers = ignore_loggers

    def _ignored(self, name: str) -> bool:
        return any(name == n or name.startswith(f"{n}.") for n in self._ignore_loggers)

    def emit(self, record: logging.LogRecord) -> None:
        """Forward a log record to the target logger.

        Args:
            record: The log record to emit.
        """
        if self._ignored(record.name):
            return
        try:
            context: dict[str, str | int | float | bool] = {
                "logger": record.name,
                "funcName": record.funcName or "",
                "lineno": record.lineno,
            }
            # Add any extra attributes passed via logging call
            for key, value in record.__dict__.items():
                if key not in _STANDARD_LOGRECORD_ATTRS and isinstance(
                    value, (str, int, float, bool)
                ):
                    context[key] = value

            error = None
            if record.exc_info and record.exc_info[1] is not None:
                error = record.exc_info[1]

            level = level_for_record(record.levelno)
            message = record.getMessage()
            if level == LogLevel.DEBUG:
                self._target.debug(message, context)
            elif level == LogLevel.INFO:
                self._target.info(message, context)
            elif level == LogLevel.WARN:
                self._target.warn(message, context, error)
            elif level == LogLevel.ERROR:
                self._target.error(message, context, error)
            else:
                self._target.fatal(message, context, error)
        except Exception:
            self.handleError(record)
