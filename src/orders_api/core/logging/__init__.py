"""Logging module with structured logging and request tracking."""

from orders_api.core.logging.middleware import (
    RequestIdMiddleware,
    RequestLoggingMiddleware,
)
from orders_api.core.logging.setup import add_trace_context, configure_logging


__all__ = [
    "RequestIdMiddleware",
    "RequestLoggingMiddleware",
    "add_trace_context",
    "configure_logging",
]
