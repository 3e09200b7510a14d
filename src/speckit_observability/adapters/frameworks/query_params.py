"""Query parameter parsing for the HTTP adapter.

Invalid values raise ValidationError, which the adapter answers with 400.
"""

from speckit_observability.core.errors import ValidationError
from speckit_observability.core.models import LogLevel


def _first(params: dict[str, list[str]], name: str) -> str | None:
    values = params.get(name)
    if not values or values[0] == "":
        return None
    return values[0]


def _parse_level_param(params: dict[str, list[str]]) -> LogLevel | None:
    """Parse the 'level' query parameter (a level name or ordinal).

    Args:
        params: Parsed query string parameters (as returned by urllib.parse.parse_qs).

    Returns:
        The level, or None if the parameter is missing.
    """
    raw = _first(params, "level")
    if raw is None:
        return None
    try:
        return LogLevel.parse(raw)
    except ValueError:
        raise ValidationError(f"Invalid log level: {raw}", "level", raw) from None


def _parse_limit_param(params: dict[str, list[str]]) -> int | None:
    """Parse the 'limit' query parameter as a non-negative integer."""
    raw = _first(params, "limit")
    if raw is None:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(f"Invalid limit: {raw}", "limit", raw) from None
    if value < 0:
        raise ValidationError(f"Invalid limit: {raw}", "limit", raw)
    return value
