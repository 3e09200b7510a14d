"""JSON encoders for log entries."""

import json
from collections.abc import Iterable, Mapping
from typing import Any

from speckit_observability.core.errors import AppError, error_message
from speckit_observability.core.models import LogEntry


def encode_context(context: Mapping[str, Any]) -> str:
    """Encode a context mapping as compact single-line JSON.

    Values JSON cannot represent are written with ``str()``. A mapping JSON
    cannot encode at all (circular references, non-string keys) is written
    with ``repr()``.
    """
    try:
        return json.dumps(dict(context), separators=(",", ":"), default=str)
    except (ValueError, TypeError):
        return repr(dict(context))


def exportable_context(context: Mapping[str, Any]) -> Any:
    """Return a JSON-ready copy of ``context``, or its ``repr()`` if it has none."""
    try:
        return json.loads(json.dumps(dict(context), default=str))
    except (ValueError, TypeError):
        return repr(dict(context))


def error_to_dict(error: BaseException) -> dict[str, Any]:
    """Serialize an exception attached to a log entry."""
    if isinstance(error, AppError):
        obj = error.to_dict()
        if obj["context"] is not None:
            obj["context"] = exportable_context(obj["context"])
        return obj
    return {"name": type(error).__name__, "message": error_message(error)}


def entry_to_dict(entry: LogEntry) -> dict[str, Any]:
    """Convert a log entry to a JSON-ready dict, omitting unset fields."""
    obj: dict[str, Any] = {
        "timestamp": entry.timestamp,
        "level": int(entry.level),
        "levelName": entry.level.name,
        "message": entry.message,
    }
    if entry.context is not None:
        obj["context"] = exportable_context(entry.context)
    if entry.error is not None:
        obj["error"] = error_to_dict(entry.error)
    if entry.stack is not None:
        obj["stack"] = entry.stack
    return obj


def encode_logs(entries: Iterable[LogEntry]) -> str:
    """Encode log entries as an indented JSON array.

    Args:
        entries: Log entries in the order they should appear.

    Returns:
        JSON text. ``"[]"`` if there are no entries.
    """
    return json.dumps([entry_to_dict(e) for e in entries], indent=2, default=str)
