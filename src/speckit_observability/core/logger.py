"""Structured logger with bounded in-memory retention.

Entries are kept in a ring buffer holding the most recent ``max_logs``
entries. Every entry is stored and handed to subscribers; only entries at or
above ``log_level`` are mirrored to the console sink.
"""

import traceback
from collections import deque
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from speckit_observability.core.encoding.json_export import encode_context, encode_logs
from speckit_observability.core.errors import error_message
from speckit_observability.core.models import LogEntry, LogLevel, utc_timestamp
from speckit_observability.core.ports import ConsoleSinkPort, LogObserver, Unsubscribe
from speckit_observability.core.subscriptions import SubscriptionRegistry

DEFAULT_MAX_LOGS = 1000


def _capture_stack(error: BaseException | None) -> str | None:
    if error is None or error.__traceback__ is None:
        return None
    return "".join(traceback.format_exception(error))


def format_console_line(entry: LogEntry) -> str:
    """Format an entry as ``[<timestamp>] [<LEVEL>] <message>[ <ctx>][ <err>]``."""
    line = f"[{entry.timestamp}] [{entry.level.name}] {entry.message}"
    if entry.context is not None:
        line += f" {encode_context(entry.context)}"
    if entry.error is not None and (text := error_message(entry.error)):
        line += f" {text}"
    return line


class Logger:
    """Leveled logger that retains entries in a FIFO ring buffer.

    Args:
        sink: Console sink that receives formatted lines.
        max_logs: Maximum number of retained entries.
        log_level: Minimum level mirrored to the sink.
        clock: Returns the timestamp stamped on new entries.
    """

    def __init__(
        self,
        sink: ConsoleSinkPort,
        *,
        max_logs: int = DEFAULT_MAX_LOGS,
        log_level: LogLevel | int | str = LogLevel.INFO,
        clock: Callable[[], str] = utc_timestamp,
    ) -> None:
        self._sink = sink
        self._clock = clock
        self._max_logs = self._check_capacity(max_logs)
        self._log_level = LogLevel.parse(log_level)
        self._buffer: deque[LogEntry] = deque(maxlen=self._max_logs)
        self._observers = SubscriptionRegistry(sink, "Error in log observer")

    @staticmethod
    def _check_capacity(max_logs: int) -> int:
        if isinstance(max_logs, bool) or not isinstance(max_logs, int) or max_logs < 1:
            raise ValueError(f"max_logs must be a positive integer, got {max_logs!r}")
        return max_logs

    @property
    def sink(self) -> ConsoleSinkPort:
        return self._sink

    @property
    def log_level(self) -> LogLevel:
        return self._log_level

    @property
    def max_logs(self) -> int:
        return self._max_logs

    def set_log_level(self, level: LogLevel | int | str) -> None:
        """Set the minimum level mirrored to the console sink."""
        self._log_level = LogLevel.parse(level)

    def set_max_logs(self, max_logs: int) -> None:
        """Set retention capacity, discarding the oldest entries if over it."""
        self._max_logs = self._check_capacity(max_logs)
        self._buffer = deque(self._buffer, maxlen=self._max_logs)

    def subscribe(self, observer: LogObserver) -> Unsubscribe:
        """Receive every new entry regardless of level."""
        return self._observers.subscribe(observer)

    def _log(
        self,
        level: LogLevel,
        message: str,
        context: Mapping[str, Any] | None,
        error: BaseException | None,
    ) -> LogEntry:
        entry = LogEntry(
            timestamp=self._clock(),
            level=level,
            message=message,
            context=MappingProxyType(dict(context)) if context is not None else None,
            error=error,
            stack=_capture_stack(error),
        )
        self._buffer.append(entry)
        self._observers.notify(entry)
        if entry.level >= self._log_level:
            self._emit(entry)
        return entry

    def _emit(self, entry: LogEntry) -> None:
        line = format_console_line(entry)
        if entry.level == LogLevel.DEBUG:
            self._sink.debug(line)
        elif entry.level == LogLevel.INFO:
            self._sink.info(line)
        elif entry.level == LogLevel.WARN:
            self._sink.warn(line)
        else:
            self._sink.error(line)
            if entry.stack:
                self._sink.error(entry.stack)

    def debug(self, message: str, context: Mapping[str, Any] | None = None) -> LogEntry:
        return self._log(LogLevel.DEBUG, message, context, None)

    def info(self, message: str, context: Mapping[str, Any] | None = None) -> LogEntry:
        return self._log(LogLevel.INFO, message, context, None)

    def warn(
        self,
        message: str,
        context: Mapping[str, Any] | None = None,
        error: BaseException | None = None,
    ) -> LogEntry:
        return self._log(LogLevel.WARN, message, context, error)

    def error(
        self,
        message: str,
        context: Mapping[str, Any] | None = None,
        error: BaseException | None = None,
    ) -> LogEntry:
        return self._log(LogLevel.ERROR, message, context, error)

    def fatal(
        self,
        message: str,
        context: Mapping[str, Any] | None = None,
        error: BaseException | None = None,
    ) -> LogEntry:
        return self._log(LogLevel.FATAL, message, context, error)

    def get_logs(
        self, level: LogLevel | int | str | None = None, limit: int | None = None
    ) -> list[LogEntry]:
        """Return retained entries at or above ``level``, keeping the last ``limit``.

        Args:
            level: Minimum level to include. Default includes everything.
            limit: Keep only the most recent ``limit`` entries after filtering.

        Returns:
            A new list in chronological order.
        """
        entries = list(self._buffer)
        if level is not None:
            threshold = LogLevel.parse(level)
            entries = [e for e in entries if e.level >= threshold]
        if limit is not None:
            entries = entries[-limit:] if limit > 0 else []
        return entries

    def clear_logs(self) -> None:
        self._buffer.clear()

    def export_logs(self) -> str:
        """Serialize all retained entries as a JSON array, oldest first."""
        return encode_logs(self._buffer)

    def get_error_count(self) -> int:
        return sum(1 for e in self._buffer if e.level >= LogLevel.ERROR)

    def get_recent_errors(self, limit: int = 10) -> list[LogEntry]:
        return self.get_logs(LogLevel.ERROR, limit)
