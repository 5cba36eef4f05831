"""FastAPI application with lifespan management and health endpoints."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from recipebox.api.routes import duplicates
from recipebox.config import settings
from recipebox.services.database import close_mongodb_connection, connect_to_mongodb

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan (startup and shutdown).

    Args:
        app: FastAPI application instance

    Yields:
        None
    """
    # Startup: Connect to MongoDB
    logger.info(
        "Starting RecipeBox",
        app_name=settings.app_name,
        version=settings.app_version,
        database=settings.mongodb_database,
    )

    try:
        await connect_to_mongodb(
            uri=settings.mongodb_uri,
            database_name=settings.mongodb_database,
        )
        logger.info("Connected to MongoDB", database=settings.mongodb_database)
    except Exception as e:
        logger.error("Failed to connect to MongoDB", error=str(e))
        raise

    yield

    # Shutdown: Close MongoDB connection
    logger.info("Shutting down RecipeBox")
    await close_mongodb_connection()
    logger.info("Closed MongoDB connection")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="RecipeBox - recipe collection with duplicate detection",
    lifespan=lifespan,
)

if settings.cors_origins_list:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )
    logger.info("CORS enabled", origins=settings.cors_origins_list)


# Register API routers
app.include_router(duplicates.router, prefix="/api/v1")


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint.

    Returns:
        JSONResponse with health status
    """
    return JSONResponse(
        content={
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.app_version,
        }
    )


@app.get("/")
async def root() -> JSONResponse:
    """Root endpoint with API information."""
    return JSONResponse(
        content={
            "app": settings.app_name,
            "version": settings.app_version,
            "description": "RecipeBox API",
            "docs_url": "/docs",
        }
    )
