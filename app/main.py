# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Playspaces API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload --port 3001
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.exceptions import (
    PlayspaceException,
    playspace_exception_handler,
    unexpected_exception_handler,
)
from app.routers import health, playspaces
from lib.supabase_client import SupabaseClient

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Welcome to the Playspaces API!"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup builds the shared Supabase client once so configuration
    errors surface before the first request.
    """
    logger.info(f"Starting Playspaces API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    SupabaseClient.get_client()

    yield

    logger.info("Shutting down Playspaces API")


# Create FastAPI application
app = FastAPI(
    title="Playspaces API",
    description="List and create playspace listings backed by Supabase.",
    version="1.0.0",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Playspaces",
            "description": "List and create playspaces",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(PlayspaceException)
async def handle_playspace_exception(request: Request, exc: PlayspaceException):
    """Handle custom Playspaces exceptions."""
    return await playspace_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    return await unexpected_exception_handler(request, exc)


# =============================================================================
# Routers
# =============================================================================

app.include_router(
    playspaces.router,
    prefix="/playspaces",
    tags=["Playspaces"]
)

app.include_router(
    health.router,
    tags=["Health"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """Welcome message."""
    return {"message": WELCOME_MESSAGE}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
