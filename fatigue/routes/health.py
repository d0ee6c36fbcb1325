"""
Health check endpoints.
"""

from fastapi import APIRouter

from fatigue.config import settings
from fatigue.features.analysis.services import analysis_store

router = APIRouter()


@router.get("/healthz")
async def healthz():
    """Basic health check - always returns 200 if app is running."""
    return {"status": "ok", "service": "message-fatigue"}


@router.get("/readyz")
async def readyz():
    """
    Readiness check.

    The service has no external dependencies, so it is always ready; the
    payload also reports whether an analysis has been published yet.
    """
    current = analysis_store.peek()
    limits = settings.get_upload_limits()

    return {
        "overall_ok": True,
        "checks": {
            "analysis": {
                "ok": True,
                "published": current is not None,
                "generated_at": current.generated_at.isoformat() if current else None,
            },
            "configuration": {
                "ok": True,
                "environment": settings.environment,
                "max_upload_megabytes": limits["max_megabytes"],
                "allowed_extensions": limits["extensions"],
            },
        },
    }
