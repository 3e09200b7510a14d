"""Core domain models for observability data."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import IntEnum
from typing import Any

_LEVEL_ALIASES = {"WARNING": "WARN", "CRITICAL": "FATAL"}


class LogLevel(IntEnum):
    """Ordinal log severity, DEBUG lowest and FATAL highest."""

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4

    @classmethod
    def parse(cls, value: "LogLevel | int | str") -> "LogLevel":
        """Coerce a level, its ordinal, or its (case-insensitive) name.

        Raises:
            ValueError: If the value does not name a level.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            name = value.strip().upper()
            if name.isdigit():
                return cls(int(name))
            name = _LEVEL_ALIASES.get(name, name)
            try:
                return cls[name]
            except KeyError:
                raise ValueError(f"Unknown log level: {value!r}") from None
        return cls(value)


def utc_timestamp() -> str:
    """Return the current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    now = datetime.now(UTC)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class LogEntry:
    """A structured log entry.

    Attributes:
        timestamp: ISO-8601 creation time.
        level: Severity of the entry.
        message: The log message.
        context: Structured fields attached by the caller.
        error: The exception that caused this entry, if any.
        stack: Traceback text captured from ``error`` at creation.
    """

    timestamp: str
    level: LogLevel
    message: str
    context: Mapping[str, Any] | None = None
    error: BaseException | None = None
    stack: str | None = None

    @property
    def level_name(self) -> str:
        return self.level.name
