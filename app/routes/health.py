"""
Health check endpoints.
Used for monitoring, deployment readiness checks, and basic connectivity tests.
"""

from fastapi import APIRouter, HTTPException, Request
from app.core.settings import settings
from datetime import datetime, timezone


router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check():
    """
    Basic health check endpoint.
    Returns 200 if service is running.
    """
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/db")
def database_health(request: Request):
    """
    Database connectivity check.
    Lists Firestore root collections to prove the connection works.
    """
    resources = request.app.state.resources
    if resources is None:
        raise HTTPException(status_code=503, detail="Database not initialized")

    try:
        collections_count = resources.health_check()
    except Exception as e:
        raise HTTPException(
            status_code=503,
            detail=f"Database connection failed: {str(e)}"
        )

    return {
        "status": "healthy",
        "database": "firestore",
        "connected": True,
        "collections_count": collections_count,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
