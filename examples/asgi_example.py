"""Framework-free ASGI example.

Serves a couple of documentation pages wrapped in ObservabilityMiddleware
and mounts the read-only observability endpoints under /_observability.

Run with:
    uvicorn examples.asgi_example:app --reload

Then:
    curl http://localhost:8000/installation
    curl http://localhost:8000/_observability/logs?level=info
    curl http://localhost:8000/_observability/metrics
"""

import asyncio
import logging

from speckit_observability import (
    NotFoundError,
    ObservabilityHandler,
    create_observability_hook,
    get_observability,
    handle_error,
)
from speckit_observability.adapters.frameworks.asgi import (
    ObservabilityMiddleware,
    Receive,
    Scope,
    Send,
    create_asgi_app,
)

PAGES = {
    "/": "<h1>Speck-It</h1>",
    "/installation": "<h1>Installation</h1>",
    "/api": "<h1>API reference</h1>",
}

logging.basicConfig(level=logging.INFO)
logging.getLogger().addHandler(ObservabilityHandler(get_observability().logger))

pages_hook = create_observability_hook("Pages")
observability_app = create_asgi_app()


async def render(path: str) -> str:
    await asyncio.sleep(0.005)
    if path not in PAGES:
        raise NotFoundError("Page", path)
    return PAGES[path]


async def site(scope: Scope, receive: Receive, send: Send) -> None:
    path = scope["path"]
    try:
        body = await pages_hook.measure_performance("render", lambda: render(path))
        status = 200
    except Exception as exc:
        app_error = handle_error(exc, {"path": path})
        body, status = app_error.message, app_error.status_code
    await send(
        {
            "type": "http.response.start",
            "status": status,
            "headers": [(b"content-type", b"text/html")],
        }
    )
    await send({"type": "http.response.body", "body": body.encode()})


async def router(scope: Scope, receive: Receive, send: Send) -> None:
    if scope["type"] == "http" and scope["path"].startswith("/_observability"):
        inner = dict(scope, path=scope["path"].removeprefix("/_observability") or "/")
        await observability_app(inner, receive, send)
        return
    await site(scope, receive, send)


app = ObservabilityMiddleware(router, "docs", exclude_paths=["/_observability/*"])
