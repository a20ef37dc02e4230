"""
Recipes API Service - Main API Server
Wires configuration, the document store connection, middleware and routes
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorDatabase
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import structlog
import time
from typing import AsyncGenerator, Optional

from core.config import settings
from core.database import init_db, close_db
from core.exceptions import RecipeAPIError
from api.routes import API_PREFIX, api_router
from middleware.logging import LoggingMiddleware
from services.recipe_repository import RecipeRepository

# Configure structured logging
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    ),
    logger_factory=structlog.WriteLoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events"""
    # Startup
    logger.info("Starting Recipes API Service")
    connected = False

    if getattr(app.state, "recipe_repository", None) is None:
        try:
            database = await init_db()
        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")
            raise
        app.state.recipe_repository = RecipeRepository(database[settings.MONGODB_COLLECTION])
        connected = True

    logger.info("Server is running", host=settings.HOST, port=settings.PORT)

    yield

    # Shutdown
    logger.info("Shutting down Recipes API Service")
    if connected:
        await close_db()
        app.state.recipe_repository = None


def create_app(database: Optional[AsyncIOMotorDatabase] = None) -> FastAPI:
    """
    Create and configure the FastAPI application

    Args:
        database: Optional pre-connected database. When ``None`` the
            lifespan handler connects using ``MONGODB_URI``.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="CRUD and search API for recipe records",
        version=settings.VERSION,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan
    )

    if database is not None:
        app.state.recipe_repository = RecipeRepository(database[settings.MONGODB_COLLECTION])

    # CORS Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Process-Time", "X-Request-ID"]
    )

    app.add_middleware(LoggingMiddleware)

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        """Add response time header"""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        return response

    @app.exception_handler(RecipeAPIError)
    async def recipe_error_handler(request: Request, exc: RecipeAPIError):
        """Render domain errors as response envelopes"""
        return JSONResponse(status_code=exc.status_code, content=exc.to_envelope())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Malformed path or query parameters"""
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "message": "Validation errors",
                "errors": [
                    {
                        "field": ".".join(str(part) for part in error["loc"]),
                        "message": error["msg"],
                    }
                    for error in exc.errors()
                ],
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Unmatched routes and other HTTP errors"""
        message = "Route not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler"""
        logger.error(
            "Unhandled exception",
            exception=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            method=request.method
        )
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "message": str(exc) or "Internal Server Error",
                "request_id": getattr(request.state, "request_id", None),
            }
        )

    @app.get("/")
    async def root():
        """Welcome payload listing the available endpoints"""
        return {
            "message": f"Welcome to {settings.APP_NAME}",
            "version": settings.VERSION,
            "endpoints": {
                "create": f"POST {API_PREFIX}",
                "getAll": f"GET {API_PREFIX}?page=1&limit=10",
                "getById": f"GET {API_PREFIX}/:id",
                "update": f"PUT {API_PREFIX}/:id",
                "delete": f"DELETE {API_PREFIX}/:id",
                "search": f"GET {API_PREFIX}/search?cuisine=Italian&tags=vegetarian",
            },
        }

    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development and settings.DEBUG,
        log_config=None  # Use structlog instead
    )
