"""Observability core: logger, performance monitor and error taxonomy."""
