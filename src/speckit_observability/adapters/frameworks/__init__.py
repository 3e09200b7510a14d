"""Web framework adapters."""

from speckit_observability.adapters.frameworks.asgi import (
    ObservabilityMiddleware,
    create_asgi_app,
)

__all__ = ["ObservabilityMiddleware", "create_asgi_app"]
