"""
Prescriber Interaction Service - Main Application Entry Point

A FastAPI application that checks a drug being prescribed for food,
allergy and drug-to-drug interactions against the FDB reference dataset.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from prescriber.api import api_router
from prescriber.config import get_settings
from prescriber.core.exceptions import StoreUnavailableError
from prescriber.core.logging import get_logger, setup_logging
from prescriber.core.rate_limit import limiter
from prescriber.db.reference_store import get_reference_store
from prescriber.schemas.common import ErrorResponse
from prescriber.dependencies import close_services

# Setup logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Connects the reference store on startup and closes it on shutdown.
    """
    settings = get_settings()

    # Startup
    logger.info(
        f"Starting {settings.APP_NAME} v{settings.APP_VERSION}",
        extra={"environment": "production" if not settings.DEBUG else "development"}
    )

    # The service still starts without a store; /health reports it as degraded
    try:
        store = await get_reference_store()
        logger.info("Reference store connected", extra=store.get_stats())
    except StoreUnavailableError as e:
        logger.warning(f"Reference store initialization failed: {e}")

    logger.info(
        f"Application started on {settings.HOST}:{settings.PORT}",
        extra={"debug": settings.DEBUG}
    )

    yield

    # Shutdown
    logger.info("Shutting down application...")

    await close_services()

    logger.info("Application shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Drug, food and allergy interaction discovery for prescribing",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan
    )

    # Add rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.FRONTEND_ORIGIN],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-RateLimit-Limit", "X-RateLimit-Remaining"]
    )

    # Add request timing middleware
    @app.middleware("http")
    async def add_timing_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        return response

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Handle all unhandled exceptions.

        Returns sanitized error response without driver or stack details.
        """
        logger.error(
            f"Unhandled exception: {type(exc).__name__}",
            extra={
                "path": request.url.path,
                "method": request.method
            },
            exc_info=exc
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                error="InternalServerError",
                message="An unexpected error occurred"
            ).model_dump(mode="json")
        )

    # Include API routes
    app.include_router(api_router, prefix="/api/v1")

    # Root endpoint
    @app.get("/")
    async def root():
        """Root endpoint with service information."""
        return {
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "docs": "/docs" if settings.DEBUG else "Disabled in production",
            "health": "/api/v1/health",
            "interactions": "/api/v1/interactions"
        }

    return app


# Create application instance
app = create_application()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "prescriber.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        workers=1 if settings.DEBUG else 4,
        log_level="debug" if settings.DEBUG else "info"
    )
