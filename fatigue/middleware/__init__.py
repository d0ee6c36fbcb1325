"""
Middleware components for request processing.

This package contains middleware for:
- Request context (request ID, client address, user agent)
"""

from fatigue.middleware.request_context import RequestContextMiddleware

__all__ = ["RequestContextMiddleware"]
