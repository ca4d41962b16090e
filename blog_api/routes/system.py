"""
System routes (health check, root)
"""
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request, Response, status

from blog_api.config import settings

router = APIRouter(tags=["System"])


@router.get("/health")
def health_check(request: Request, response: Response):
    """
    Health check endpoint
    Tests actual database connectivity, 503 when the store is unreachable
    """
    health_status = {
        "status": "healthy",
        "service": settings.APP_NAME,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {},
    }

    db = getattr(request.app.state, "db", None)
    try:
        if db is None:
            raise RuntimeError("Database is not open")
        start_time = time.time()
        db.ping()
        db_response_time = round((time.time() - start_time) * 1000, 2)  # ms

        health_status["checks"]["database"] = {
            "status": "healthy",
            "response_time_ms": db_response_time,
        }
    except Exception as e:
        health_status["status"] = "unhealthy"
        health_status["checks"]["database"] = {
            "status": "unhealthy",
            "error": str(e),
        }
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return health_status


@router.get("/")
def root():
    """Root endpoint - basic info"""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "endpoints": {
            "health": "/health",
            "docs": "/docs",
            "auth": f"{settings.API_PREFIX}/auth",
            "users": f"{settings.API_PREFIX}/users",
            "posts": f"{settings.API_PREFIX}/posts",
        },
    }
