"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, docportal.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docportal.api.deps.dependencies import get_service_cache
from docportal.api.errors import register_exception_handlers
from docportal.boundary.db.connection import dispose_engine
from docportal.configs import get_settings
from docportal.core.exceptions import ConfigurationError
from docportal.observability.logger import configure_logging
from docportal.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from . import api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    # Startup
    logger.info("Pre-warming service cache...")
    cache = get_service_cache()
    try:
        _ = cache.document_engine
        _ = cache.signing
        logger.info("Service cache pre-warmed")
    except ConfigurationError as e:
        # Routes that need the missing client fail per request instead
        logger.warning("External client not configured", extra={"error": e.message})

    yield

    # Shutdown
    await cache.aclose()
    await dispose_engine()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Document Portal API",
        description="Document management and digital signing over an external Document Engine",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    register_exception_handlers(app)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "docportal.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
