# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Showcase API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.exceptions import (
    ShowcaseException,
    showcase_exception_handler,
    unexpected_exception_handler,
    validation_exception_handler,
)
from app.routers import comments, health, projects, upload, users
from lib.database import database

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: create the pooled database engine
    - Shutdown: drain the pool
    """
    logger.info(f"Starting Showcase API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    await database.connect(
        settings.DATABASE_URL,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        create_tables=settings.DB_CREATE_TABLES,
    )

    try:
        yield
    finally:
        logger.info("Shutting down Showcase API")
        await database.disconnect()


# Create FastAPI application
app = FastAPI(
    title="Showcase API",
    description="""
## Project Showcase API

Users sign in with Supabase Auth, publish projects, like and comment on
each other's work, and upload project images and avatars.

### Authentication

Send the Supabase access token as `Authorization: Bearer <token>`.

| Access | Endpoints |
|--------|-----------|
| **Required** | create/edit/delete projects, likes, comments, `/me` routes |
| **Optional** | `GET /projects`, `GET /projects/{id}` (adds `liked`) |
| **None** | user sync/list/delete, comment listing, uploads |
""",
    version=health.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Users", "description": "Identity sync and user profiles"},
        {"name": "Projects", "description": "Projects, likes and aggregated counts"},
        {"name": "Comments", "description": "Project comments"},
        {"name": "Upload", "description": "Image uploads to storage"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(ShowcaseException)
async def handle_showcase_exception(request: Request, exc: ShowcaseException):
    """Handle custom Showcase exceptions."""
    return await showcase_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies and path parameters."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    return await unexpected_exception_handler(request, exc)


# =============================================================================
# Routers
# =============================================================================

app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(projects.router, prefix="/api/projects", tags=["Projects"])
app.include_router(comments.router, prefix="/api/comments", tags=["Comments"])
app.include_router(upload.router, prefix="/api/upload", tags=["Upload"])
app.include_router(health.router, prefix="/api", tags=["Health"])


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Showcase API",
        "version": health.API_VERSION,
        "docs": "/docs",
        "health": "/api/health",
    }
