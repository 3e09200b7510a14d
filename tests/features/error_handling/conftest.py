"""BDD step definitions for error_handling.feature."""

import asyncio
from dataclasses import dataclass, field
from typing import Any

import pytest
from pytest_bdd import given, parsers, then, when

from speckit_observability.adapters.console import RecordingConsoleSink
from speckit_observability.config import ObservabilitySettings
from speckit_observability.context import Observability
from speckit_observability.core.errors import AppError, NotFoundError
from speckit_observability.core.models import LogLevel
from speckit_observability.handling import handle_error
from speckit_observability.hooks import ObservabilityHook, create_observability_hook


@dataclass
class ErrorScenarioContext:
    """State shared between the steps of one scenario."""

    observability: Observability | None = None
    error: BaseException | None = None
    handled: AppError | None = None
    hook: ObservabilityHook | None = None
    result: Any = None
    raised: BaseException | None = None
    sink: RecordingConsoleSink = field(default_factory=RecordingConsoleSink)


@pytest.fixture
def ctx() -> ErrorScenarioContext:
    """Fresh scenario context for each test."""
    return ErrorScenarioContext()


# === Background Steps ===
@given("a fresh observability bundle")
def step_fresh_bundle(ctx: ErrorScenarioContext) -> None:
    ctx.observability = Observability.create(
        ObservabilitySettings(environment="development"), sink=ctx.sink
    )


# === Error Steps ===
@given(parsers.parse('a NotFoundError for resource "{resource}" with ID "{resource_id}"'))
def step_not_found(ctx: ErrorScenarioContext, resource: str, resource_id: str) -> None:
    ctx.error = NotFoundError(resource, resource_id)


@given(parsers.parse('a RuntimeError with message "{message}"'))
def step_runtime_error(ctx: ErrorScenarioContext, message: str) -> None:
    ctx.error = RuntimeError(message)


@when("the error is handled")
def step_handle(ctx: ErrorScenarioContext) -> None:
    ctx.handled = handle_error(ctx.error, observability=ctx.observability)


@when(parsers.parse('the error is handled with context operation "{operation}"'))
def step_handle_with_context(ctx: ErrorScenarioContext, operation: str) -> None:
    ctx.handled = handle_error(
        ctx.error, {"operation": operation}, observability=ctx.observability
    )


@then("the handled error is the original error")
def step_same_error(ctx: ErrorScenarioContext) -> None:
    assert ctx.handled is ctx.error


@then(parsers.parse('the handled error has code "{code}" and status {status:d}'))
def step_code_and_status(ctx: ErrorScenarioContext, code: str, status: int) -> None:
    assert ctx.handled.code == code
    assert ctx.handled.status_code == status


@then(parsers.parse('the handled error context records original error "{name}"'))
def step_original_error(ctx: ErrorScenarioContext, name: str) -> None:
    assert ctx.handled.context["originalError"] == name


@then(parsers.parse('exactly {n:d} ERROR entry was logged with message "{message}"'))
def step_logged_once(ctx: ErrorScenarioContext, n: int, message: str) -> None:
    errors = ctx.observability.logger.get_logs(LogLevel.ERROR)
    assert len(errors) == n
    assert errors[0].message == message
    assert errors[0].error is ctx.error


# === Measurement Steps ===
@given(parsers.parse('a hook for component "{component}"'))
def step_hook(ctx: ErrorScenarioContext, component: str) -> None:
    ctx.hook = create_observability_hook(component, observability=ctx.observability)


@when(parsers.parse('the hook measures "{operation}" with an operation returning "{value}"'))
def step_measure_success(ctx: ErrorScenarioContext, operation: str, value: str) -> None:
    async def work() -> str:
        await asyncio.sleep(0)
        return value

    ctx.result = asyncio.run(ctx.hook.measure_performance(operation, work))


@when(parsers.parse('the hook measures "{operation}" with an operation raising "{message}"'))
def step_measure_failure(ctx: ErrorScenarioContext, operation: str, message: str) -> None:
    ctx.error = ConnectionError(message)

    async def work() -> None:
        await asyncio.sleep(0)
        raise ctx.error

    try:
        asyncio.run(ctx.hook.measure_performance(operation, work))
    except ConnectionError as exc:
        ctx.raised = exc


@then(parsers.parse('the measured result is "{value}"'))
def step_result(ctx: ErrorScenarioContext, value: str) -> None:
    assert ctx.result == value


@then("the same exception reached the caller")
def step_same_exception(ctx: ErrorScenarioContext) -> None:
    assert ctx.raised is ctx.error


@then(parsers.parse('metric "{name}" is recorded'))
def step_metric_recorded(ctx: ErrorScenarioContext, name: str) -> None:
    assert ctx.observability.monitor.get_metric(name) >= 0


@then(parsers.parse('metric "{name}" is absent'))
def step_metric_absent(ctx: ErrorScenarioContext, name: str) -> None:
    assert ctx.observability.monitor.get_metric(name) is None


@then(parsers.parse('metric "{name}" equals {value:d}'))
def step_metric_equals(ctx: ErrorScenarioContext, name: str, value: int) -> None:
    assert ctx.observability.monitor.get_metric(name) == value
