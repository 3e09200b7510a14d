"""Shared test fixtures for all test modules."""

import itertools
from collections.abc import Callable, Iterator

import pytest

from speckit_observability.adapters.console import RecordingConsoleSink
from speckit_observability.config import ObservabilitySettings
from speckit_observability.context import Observability, reset_observability
from speckit_observability.core.logger import Logger
from speckit_observability.core.models import LogLevel
from speckit_observability.core.performance import PerformanceMonitor

try:
    import httpx
except ImportError:
    httpx = None


@pytest.fixture
def sink() -> RecordingConsoleSink:
    """Console sink that records every line it receives."""
    return RecordingConsoleSink()


@pytest.fixture
def fixed_clock() -> Callable[[], str]:
    """Clock returning increasing, predictable timestamps."""
    seconds = itertools.count()
    return lambda: f"2024-01-01T00:00:{next(seconds) % 60:02d}.000Z"


@pytest.fixture
def logger(sink: RecordingConsoleSink, fixed_clock: Callable[[], str]) -> Logger:
    """Logger writing to the recording sink, mirroring DEBUG and above."""
    return Logger(sink, log_level=LogLevel.DEBUG, clock=fixed_clock)


@pytest.fixture
def monitor(logger: Logger) -> PerformanceMonitor:
    """Performance monitor reporting through the test logger."""
    return PerformanceMonitor(logger)


@pytest.fixture
def observability(sink: RecordingConsoleSink) -> Observability:
    """Fresh observability bundle with a recording sink."""
    settings = ObservabilitySettings(environment="development")
    return Observability.create(settings, sink=sink)


@pytest.fixture(autouse=True)
def _isolate_process_default(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep the process-wide bundle and SPECKIT_OBS_* variables out of tests."""
    for name in ("ENVIRONMENT", "LOG_LEVEL", "MAX_LOGS", "SLOW_THRESHOLD_MS"):
        monkeypatch.delenv(f"SPECKIT_OBS_{name}", raising=False)
    reset_observability()
    yield
    reset_observability()


# === ASGI Test Fixtures ===


@pytest.fixture
def asgi_test_client():
    """Factory fixture that creates an httpx.AsyncClient for ASGI testing.

    Usage:
        async def test_something(asgi_test_client):
            app = create_asgi_app(observability)
            async with asgi_test_client(app) as client:
                response = await client.get("/logs")
    """
    if httpx is None:
        pytest.skip("httpx not installed")

    def _get_client(app):
        """Return an AsyncClient context manager for the given app."""
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        )

    return _get_client
