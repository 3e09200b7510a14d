"""Encoders for observability data."""
