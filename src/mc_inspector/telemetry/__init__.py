"""Logging and runtime telemetry helpers."""

from .logging import configure_logging

__all__ = ["configure_logging"]
