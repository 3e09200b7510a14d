"""Adapters connecting the core to stdlib logging and ASGI servers."""
