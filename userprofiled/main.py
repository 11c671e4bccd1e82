"""Main FastAPI application for userprofiled.

This module creates and configures the FastAPI application that exposes
userprofile_library via REST API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from userprofile_library.config import load_settings

from . import __version__
from .routers import contexts_router
from .routers import profiles_router
from .routers import status_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Handles startup and shutdown events.

    Args:
        app: FastAPI application instance
    """
    # Startup
    settings = load_settings()
    logging.getLogger().setLevel(settings.log_level.upper())
    logger.info(f"Starting userprofiled on {settings.host}:{settings.port}")
    logger.info(f"Storage: {settings.store_backend} ({settings.storage_path})")

    yield

    # Shutdown
    logger.info("Shutting down userprofiled")


# Create FastAPI application
app = FastAPI(
    title="userprofiled",
    description="REST API for declarative user profile configuration and compiled attribute metadata",
    version=__version__,
    lifespan=lifespan,
)

# Include routers
app.include_router(status_router)
app.include_router(contexts_router)
app.include_router(profiles_router)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint.

    Returns:
        Welcome message with API information
    """
    return {
        "name": "userprofiled",
        "version": __version__,
        "description": "REST API for declarative user profiles",
        "docs": "/docs",
        "openapi": "/openapi.json",
    }
