"""
FastAPI application for the message fatigue calculator.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from fatigue.config import settings
from fatigue.features.analysis.api import router as analysis_router
from fatigue.features.analysis.services import analysis_store
from fatigue.infrastructure.observability.logging import get_logger, log_request, setup_logging
from fatigue.middleware import RequestContextMiddleware
from fatigue.routes import health

# Setup logging before creating the app
setup_logging(log_level=settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and drop the published analysis on shutdown."""
    limits = settings.get_upload_limits()
    logger.info(
        "Application starting",
        environment=settings.environment,
        debug=settings.debug,
        max_upload_bytes=limits["max_bytes"],
        allowed_extensions=limits["extensions"],
    )

    yield

    logger.info("Application shutting down")
    analysis_store.clear()


app = FastAPI(
    title="Message Fatigue Calculator",
    description="Per-recipient message frequency and fatigue risk from CSV send exports",
    version="0.1.0",
    debug=settings.debug,
    lifespan=lifespan,
)

# Include routers
app.include_router(health.router)
app.include_router(analysis_router)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log HTTP requests with timing."""
    start_time = time.time()
    response = await call_next(request)
    process_time = (time.time() - start_time) * 1000

    log_request(
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round(process_time, 2),
        request_id=getattr(request.state, "request_id", None),
    )
    return response


# Added last so it wraps the timing middleware and the id is bound first
app.add_middleware(RequestContextMiddleware)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
