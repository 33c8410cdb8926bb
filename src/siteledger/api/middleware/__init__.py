"""API middleware."""

from siteledger.api.middleware.error_handler import ErrorHandlerMiddleware
from siteledger.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
