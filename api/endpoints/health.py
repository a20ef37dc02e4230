"""
Recipes API Health Check Endpoints
Liveness and store connectivity probes
"""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
import time
import structlog

from core.config import settings
from core.dependencies import get_recipe_repository

logger = structlog.get_logger()
router = APIRouter()


@router.get("")
async def health_check(request: Request):
    """Health check including a round-trip to the document store"""
    health_status = {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.VERSION,
        "timestamp": time.time(),
        "checks": {}
    }

    try:
        await get_recipe_repository(request).ping()
        health_status["checks"]["database"] = {"status": "healthy"}
    except Exception as e:
        logger.error(f"Database health check failed: {str(e)}")
        health_status["checks"]["database"] = {"status": "unhealthy", "error": str(e)}
        health_status["status"] = "degraded"

    status_code = status.HTTP_200_OK if health_status["status"] == "healthy" else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(status_code=status_code, content=health_status)


@router.get("/live")
async def liveness_check():
    """Liveness probe endpoint"""
    return {"status": "alive"}
