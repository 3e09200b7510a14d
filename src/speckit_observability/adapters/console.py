"""Console sink adapters implementing ConsoleSinkPort."""

import logging

DEFAULT_CONSOLE_LOGGER = "speckit_observability.console"


class LoggingConsoleSink:
    """Console sink that writes each line to a standard library logger.

    The logger's own handlers and level decide where lines end up; the
    core has already applied its minimum level before calling the sink.

    Args:
        logger_name: Name of the ``logging`` logger to write to.
    """

    def __init__(self, logger_name: str = DEFAULT_CONSOLE_LOGGER) -> None:
        self.logger_name = logger_name
        self._logger = logging.getLogger(logger_name)

    def debug(self, line: str) -> None:
        self._logger.debug(line)

    def info(self, line: str) -> None:
        self._logger.info(line)

    def warn(self, line: str) -> None:
        self._logger.warning(line)

    def error(self, line: str) -> None:
        self._logger.error(line)


class RecordingConsoleSink:
    """Console sink that keeps ``(channel, line)`` pairs in memory.

    Suitable for tests and for embedding where output is rendered
    elsewhere.
    """

    def __init__(self) -> None:
        self.lines: list[tuple[str, str]] = []

    def debug(self, line: str) -> None:
        self.lines.append(("debug", line))

    def info(self, line: str) -> None:
        self.lines.append(("info", line))

    def warn(self, line: str) -> None:
        self.lines.append(("warn", line))

    def error(self, line: str) -> None:
        self.lines.append(("error", line))

    def channel(self, name: str) -> list[str]:
        """Return the lines written to one channel, in order."""
        return [line for ch, line in self.lines if ch == name]

    def clear(self) -> None:
        self.lines.clear()
