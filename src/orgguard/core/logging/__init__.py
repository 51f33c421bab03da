"""Structured logging, request logging and request ID propagation."""

from orgguard.core.logging.middleware import RequestIdMiddleware, RequestLoggingMiddleware
from orgguard.core.logging.setup import configure_logging


__all__ = [
    "RequestIdMiddleware",
    "RequestLoggingMiddleware",
    "configure_logging",
]
