"""ASGI adapter for observability endpoints and request instrumentation.

Framework-agnostic: works with any ASGI server (uvicorn, hypercorn,
daphne) and needs no web framework installed.
"""

import fnmatch
import json
import uuid
from collections.abc import Callable, Coroutine
from typing import Any
from urllib.parse import parse_qs

from speckit_observability.adapters.frameworks.query_params import (
    _parse_level_param,
    _parse_limit_param,
)
from speckit_observability.context import Observability, get_observability
from speckit_observability.core.encoding.json_export import (
    encode_logs,
    entry_to_dict,
    exportable_context,
)
from speckit_observability.handling import handle_error
from speckit_observability.hooks import create_observability_hook

# ASGI type aliases
Scope = dict[str, Any]
Receive = Callable[[], Coroutine[Any, Any, dict[str, Any]]]
Send = Callable[[dict[str, Any]], Coroutine[Any, Any, None]]
ASGIApp = Callable[[Scope, Receive, Send], Coroutine[Any, Any, None]]


def _parse_query_params(scope: Scope) -> dict[str, list[str]]:
    """Parse query string from ASGI scope into parameter dictionary.

    Returns empty dict if query_string is missing or empty.
    """
    query_string = scope.get("query_string", b"").decode(errors="replace")
    return parse_qs(query_string)


def _extract_request_id(scope: Scope, header_name: str = "X-Request-ID") -> str:
    """Return the request ID header value (case-insensitive), or a new UUID."""
    header_bytes = header_name.lower().encode()
    headers: list[tuple[bytes, bytes]] = scope.get("headers", [])
    for name, value in headers:
        if name.lower() == header_bytes:
            return str(value.decode("utf-8", errors="replace"))
    return str(uuid.uuid4())


async def _send_response(send: Send, status: int, content_type: str, body: str) -> None:
    """Send an HTTP response with headers and body.

    Args:
        send: ASGI send callable for writing response.
        status: HTTP status code.
        content_type: Content-Type header value.
        body: Response body as string (will be encoded to bytes).
    """
    headers = [(b"content-type", content_type.encode())]
    await send({"type": "http.response.start", "status": status, "headers": headers})
    await send({"type": "http.response.body", "body": body.encode()})


async def _handle_endpoint(
    send: Send,
    endpoint_func: Callable[[], str],
    observability: Observability,
    path: str,
) -> None:
    """Run an endpoint body builder and answer with JSON.

    Failures are normalized with handle_error and answered with the
    error's status code and serialized form.
    """
    try:
        body = endpoint_func()
    except Exception as exc:
        app_error = handle_error(exc, {"path": path}, observability=observability)
        error_body = json.dumps(
            {
                "error": app_error.message,
                "code": app_error.code,
                "statusCode": app_error.status_code,
                "context": (
                    exportable_context(app_error.context)
                    if app_error.context is not None
                    else None
                ),
            },
            default=str,
        )
        await _send_response(send, app_error.status_code, "application/json", error_body)
        return
    await _send_response(send, 200, "application/json", body)


def create_asgi_app(observability: Observability | None = None) -> ASGIApp:
    """Create an ASGI app exposing /logs, /logs/errors and /metrics.

    Args:
        observability: Bundle to read from. Defaults to the process-wide one,
            resolved per request.

    Returns:
        ASGI application callable.
    """

    async def app(scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return

        obs = observability or get_observability()
        path = scope["path"]
        params = _parse_query_params(scope)

        if scope.get("method", "GET") != "GET":
            await _send_response(send, 405, "text/plain", "Method Not Allowed")
        elif path == "/logs":

            def logs_body() -> str:
                level = _parse_level_param(params)
                limit = _parse_limit_param(params)
                if level is None and limit is None:
                    return obs.logger.export_logs()
                return encode_logs(obs.logger.get_logs(level, limit))

            await _handle_endpoint(send, logs_body, obs, path)
        elif path == "/logs/errors":

            def errors_body() -> str:
                limit = _parse_limit_param(params)
                recent = obs.logger.get_recent_errors(10 if limit is None else limit)
                return json.dumps(
                    {
                        "count": obs.logger.get_error_count(),
                        "recent": [entry_to_dict(e) for e in recent],
                    },
                    default=str,
                )

            await _handle_endpoint(send, errors_body, obs, path)
        elif path == "/metrics":
            await _handle_endpoint(
                send, lambda: json.dumps(obs.monitor.get_all_metrics()), obs, path
            )
        else:
            await _send_response(send, 404, "text/plain", "Not Found")

    return app


class ObservabilityMiddleware:
    """ASGI middleware that reports each HTTP request through a hook.

    Each request is timed with ``measure_performance("request", ...)`` (so
    the metric is ``<component>_request``), logged as a
    ``"<METHOD> <path>"`` event, and exceptions from the wrapped app are
    logged with ``log_error`` before being re-raised.
    """

    def __init__(
        self,
        app: ASGIApp,
        component_name: str = "http",
        observability: Observability | None = None,
        exclude_paths: list[str] | None = None,
        request_id_header: str = "X-Request-ID",
    ) -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application to wrap.
            component_name: Component name for the hook's log prefix and metrics.
            observability: Bundle to report to. Defaults to the process-wide one.
            exclude_paths: Paths to pass through untouched. Supports exact
                matches and wildcard patterns (e.g., "/internal/*").
            request_id_header: Header to read the request ID from.
        """
        self.app = app
        self.hook = create_observability_hook(component_name, observability=observability)
        self.exclude_paths = exclude_paths or []
        self.request_id_header = request_id_header

    def _path_excluded(self, path: str) -> bool:
        return any(fnmatch.fnmatch(path, pattern) for pattern in self.exclude_paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or self._path_excluded(scope["path"]):
            await self.app(scope, receive, send)
            return

        request_id = _extract_request_id(scope, self.request_id_header)
        event = f"{scope['method']} {scope['path']}"
        captured: dict[str, Any] = {"status": None}

        async def wrapped_send(message: dict[str, Any]) -> None:
            if message["type"] == "http.response.start":
                captured["status"] = message["status"]
            await send(message)

        async def call_app() -> None:
            await self.app(scope, receive, wrapped_send)

        try:
            await self.hook.measure_performance("request", call_app)
        except Exception as exc:
            self.hook.log_error(exc, {"request_id": request_id, "event": event})
            raise
        self.hook.log_event(
            event, {"request_id": request_id, "status_code": captured["status"] or 0}
        )
