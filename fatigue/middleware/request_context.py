"""
RequestContext Middleware - Adds request tracking to all requests.

Every request gets a request_id, stored on request.state and bound into
structlog's context variables so pipeline and service logs emitted while
handling the request carry the same id. The id is echoed back in the
X-Request-ID response header.

Usage:
    In endpoints:
        request.state.request_id
        request.state.client_host
"""

import uuid

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from fatigue.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Add request context to all incoming requests.

    Adds to request.state:
    - request_id: UUID for tracing this request (or the caller's X-Request-ID)
    - client_host: Direct connection address
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        request.state.client_host = request.client.host if request.client else None

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        logger.debug(
            "Request started",
            method=request.method,
            path=request.url.path,
            client_host=request.state.client_host,
            user_agent=request.headers.get("user-agent"),
        )

        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.clear_contextvars()

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
