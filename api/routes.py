"""
Recipes API Routes
Main router configuration for all API endpoints
"""

from fastapi import APIRouter
import structlog

from api.endpoints import health, recipes

logger = structlog.get_logger()

API_PREFIX = "/api/recipes"

# Create main API router
api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(
    health.router,
    prefix="/health",
    tags=["health"]
)

api_router.include_router(
    recipes.router,
    prefix=API_PREFIX,
    tags=["recipes"]
)

logger.debug("API routes configured successfully")
