"""Error handling facade: normalize any exception into the AppError taxonomy."""

from collections.abc import Mapping
from typing import Any

from speckit_observability.context import Observability, get_observability
from speckit_observability.core.errors import AppError, error_message


def handle_error(
    error: BaseException,
    context: Mapping[str, Any] | None = None,
    *,
    observability: Observability | None = None,
) -> AppError:
    """Log an error once at ERROR and return it as an AppError.

    AppError instances are logged with the caller's context and returned
    unchanged. Anything else is wrapped in an ``UNKNOWN_ERROR`` AppError
    whose context records the original exception type under
    ``originalError``.

    Args:
        error: The caught exception.
        context: Extra fields describing where the error was handled.
        observability: Bundle to log through. Defaults to the process-wide one.

    Returns:
        A fully constructed AppError. This function does not raise.
    """
    logger = (observability or get_observability()).logger

    if isinstance(error, AppError):
        logger.error(error.message, context, error)
        return error

    app_error = AppError(
        error_message(error) or type(error).__name__,
        "UNKNOWN_ERROR",
        500,
        {"originalError": type(error).__name__, **(context or {})},
    )
    logger.error(app_error.message, app_error.context, error)
    return app_error
