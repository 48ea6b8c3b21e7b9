"""
Job Board API - Main Application Entry Point

This module initializes the FastAPI application with:
- Logging configuration
- Database schema initialization and cache shutdown
- CORS middleware for frontend communication
- Prometheus metrics
- Exception handlers for service-level errors
- API router registration

Architecture:
    FastAPI App
    ├── Lifespan Management (startup/shutdown)
    ├── CORS Middleware (settings.cors_origins)
    ├── Prometheus Middleware + /metrics
    └── API Router
        ├── /auth - Current session
        ├── /jobs - Listing, detail, similar jobs, apply redirect
        ├── /companies, /domains, /skills - Filter taxonomies
        ├── /profile - Saved jobs and applications
        └── /admin - Listing, taxonomy and company management
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobboard.api import api_router
from jobboard.config import get_settings
from jobboard.database import init_db
from jobboard.exceptions import EntityInUse, JobValidationError, StorageUnavailable
from jobboard.middleware import setup_metrics
from jobboard.services.cache import close_cache, get_cache

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle events.

    Startup:
        1. Initialize database tables

    Shutdown:
        1. Close the Redis connection
    """
    await init_db()
    logger.info("Database initialized")
    yield
    await close_cache()


app = FastAPI(
    title="Job Board API",
    description="Job listings with filtering, similar jobs and application tracking",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_metrics(app)


@app.exception_handler(StorageUnavailable)
async def storage_unavailable_handler(request: Request, exc: StorageUnavailable):
    logger.error(f"Storage unavailable during {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"detail": "Storage unavailable"})


@app.exception_handler(JobValidationError)
async def validation_error_handler(request: Request, exc: JobValidationError):
    return JSONResponse(
        status_code=422,
        content={"detail": exc.message, "field": exc.field},
    )


@app.exception_handler(EntityInUse)
async def entity_in_use_handler(request: Request, exc: EntityInUse):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


app.include_router(api_router)


@app.get("/health")
async def health_check():
    cache = await get_cache()
    return {
        "status": "healthy",
        "cache": "up" if await cache.health_check() else "down",
    }
