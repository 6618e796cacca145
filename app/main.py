# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Property Admin API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main            (binds API_HOST:API_PORT)
# =============================================================================

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    PropertyAdminException,
    error_message,
    property_admin_exception_handler,
)
from app.routers import health, properties
from lib.supabase_client import SupabaseClient

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

    Startup builds the public Supabase client, which raises if the URL or
    anon key is missing and so stops the server from starting.
    """
    logger.info(f"Starting Property Admin API in {settings.ENVIRONMENT} mode")
    SupabaseClient.get_client()

    if not settings.admin_emails_list:
        logger.warning("ADMIN_EMAILS is empty, every update will be rejected")
    if not settings.VERCEL_DEPLOY_HOOK:
        logger.info("VERCEL_DEPLOY_HOOK not set, updates will not trigger a redeploy")

    yield

    logger.info("Shutting down Property Admin API")


# Create FastAPI application
app = FastAPI(
    title="Property Admin API",
    description="""
## Property listings admin

Lets site admins add, edit and delete property listings. Listings live in a
single `properties.json` document in Supabase Storage; each change rewrites the
document and triggers a redeploy of the static site.

```bash
curl -X POST http://localhost:8000/api/update-and-deploy \\
  -H "Authorization: Bearer $ACCESS_TOKEN" \\
  -H "Content-Type: application/json" \\
  -d '{"action": "add", "property": {"id": "42", "title": "Sea view flat"}}'
```
""",
    version=health.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Properties",
            "description": "Admin-only property updates",
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
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(PropertyAdminException)
async def handle_property_admin_exception(request: Request, exc: PropertyAdminException):
    """Handle custom Property Admin exceptions."""
    return await property_admin_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": error_message(exc)},
    )


# =============================================================================
# Routers
# =============================================================================

# Admin update endpoint
app.include_router(
    properties.router,
    prefix="/api",
    tags=["Properties"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api",
    tags=["Health"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Property Admin API",
        "version": health.API_VERSION,
        "docs": "/docs",
        "health": "/api/health",
        "update": "/api/update-and-deploy",
    }


def run() -> None:
    """Serve the app on API_HOST:API_PORT."""
    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
