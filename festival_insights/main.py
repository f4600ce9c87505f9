"""
FastAPI application entry point for the Festival Insights API.

This module serves as the central orchestration file for the Python backend
service layer. It configures logging and CORS, owns the warehouse connection
pool lifecycle, registers the correlation router, and starts the ASGI server.

Request handlers receive a WarehouseReader through dependency injection;
the correlation services never create database clients of their own.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from festival_insights import __version__
from festival_insights.api.correlations import router as correlations_router
from festival_insights.core.config import get_settings
from festival_insights.core.database import init_db, close_db

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifespan context manager for FastAPI application startup and shutdown events.

    On startup:
        - Initialize the warehouse connection pool
        - Log startup message

    On shutdown:
        - Close the warehouse connection pool
        - Log shutdown message
    """
    # Startup
    logger.info("Festival Insights API starting")
    try:
        await init_db()
        logger.info("Database connection pool initialized")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        # Continue startup; the pool is created lazily on first request

    yield

    # Shutdown
    logger.info("Festival Insights API shutting down")
    try:
        await close_db()
        logger.info("Database connection pool closed")
    except Exception as e:
        logger.error(f"Error closing database pool: {e}")


def create_app() -> FastAPI:
    """
    Build the FastAPI application.

    CORS origins come from Settings so deployments can allow the dashboard's
    host without code changes.
    """
    settings = get_settings()

    application = FastAPI(
        title="Festival Insights API",
        version=__version__,
        description=(
            "FastAPI backend for the festival analytics dashboard. "
            "Provides cross-signal correlation endpoints (weather, hashtags, "
            "sentiment, attribution), a combined insights report, and "
            "data-quality assessments."
        ),
        lifespan=lifespan,
    )

    # Configure CORS middleware for the dashboard frontend
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register API routers
    application.include_router(correlations_router)  # Has its own /correlations prefix

    @application.get("/health")
    async def health_check():
        """
        Health check endpoint for monitoring and load balancer probes.

        Returns:
            Dict with status 'healthy'
        """
        return {"status": "healthy"}

    @application.get("/")
    async def root():
        """
        Root endpoint providing API information.

        Returns:
            Dict with API name and version
        """
        return {
            "name": "Festival Insights API",
            "version": __version__,
            "docs": "/docs",
            "openapi": "/openapi.json",
        }

    return application


# Create FastAPI application
app = create_app()


# Run with uvicorn when executed directly
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "festival_insights.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
