"""
Health Check Endpoints.
System health and readiness checks.
"""

from datetime import datetime
from fastapi import APIRouter, Request

from citro.config import get_settings
from citro.db.database import is_initialized
from citro.voice.event_knowledge import get_event_count
from citro.voice.intent_engine import PATTERNS

router = APIRouter()
settings = get_settings()


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "version": settings.APP_VERSION
    }


@router.get("/health/ready")
async def readiness_check(request: Request):
    """
    Readiness check - verifies the pipeline and database are initialized.
    """
    checks = {
        "knowledge_base": get_event_count() > 0,
        "intent_patterns": len(PATTERNS) > 0,
        "resolver_registry": False,
        "pipeline": hasattr(request.app.state, "pipeline"),
        "database": is_initialized()
    }

    registry = getattr(request.app.state, "resolver_registry", None)
    if registry is not None:
        checks["resolver_registry"] = not registry.missing()

    all_ready = all(checks.values())

    return {
        "status": "ready" if all_ready else "not_ready",
        "checks": checks,
        "timestamp": datetime.utcnow().isoformat()
    }


@router.get("/health/live")
async def liveness_check():
    """
    Liveness check - just verifies the server is responding.
    """
    return {
        "status": "alive",
        "timestamp": datetime.utcnow().isoformat()
    }
