"""Health check endpoints."""

from fastapi import APIRouter, Request

from ventureai import __version__
from ventureai.kernel.time import utc_now

router = APIRouter()

_startup_time = utc_now()


@router.get("/health")
async def health_check(request: Request):
    """
    Basic health check endpoint.
    Reports whether a generation backend is configured.
    """
    service = getattr(request.app.state, "venture_ai", None)
    now = utc_now()
    return {
        "status": "healthy",
        "service": "ventureai",
        "version": __version__,
        "generation_configured": bool(service and service.is_configured),
        "timestamp": now.isoformat(),
        "uptime_seconds": (now - _startup_time).total_seconds(),
    }


@router.get("/live")
async def liveness_check():
    """Returns 200 if the process is alive."""
    return {"status": "alive"}
