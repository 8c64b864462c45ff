"""API middleware."""

from aurora.api.middleware.error_handler import ErrorHandlerMiddleware
from aurora.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
