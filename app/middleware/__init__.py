"""
Middleware components for request processing.

This package contains middleware for:
- Request context (request ID, structlog context binding)
- CORS for the browser client
- Error handlers mapping exceptions to the JSON error shape
"""

from app.middleware.cors import CORSMiddleware
from app.middleware.error_handler import register_error_handlers
from app.middleware.request_context import RequestContextMiddleware

__all__ = [
    "RequestContextMiddleware",
    "CORSMiddleware",
    "register_error_handlers",
]
