# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Storefront API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   poetry run uvicorn app.main:app --reload --port 8787
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    StorefrontException,
    storefront_exception_handler,
    validation_exception_handler,
)
from app.routers import health
from app.auth import routes as auth_routes

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

    Settings are validated on import, so reaching startup means the
    user service URL and key are present.
    """
    logger.info(f"Starting Storefront API in {settings.ENVIRONMENT} mode")
    logger.info(f"User service: {settings.supabase_base_url}")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    yield

    logger.info("Shutting down Storefront API")


# Create FastAPI application
app = FastAPI(
    title="Storefront API",
    description="""
## Storefront Auth API

Registration and login for the storefront, backed by Supabase Auth.

### Quick Start

```bash
# Register
curl -X POST http://localhost:8787/auth \\
  -H "Content-Type: application/json" \\
  -d '{"email": "jane@example.com", "first_name": "Jane", "last_name": "Doe", "password": "s3cret-pass"}'

# Log in
curl "http://localhost:8787/auth?email=jane@example.com&password=s3cret-pass"
```

Errors are returned as `{"error": {"message": "...", "code": "..."}}`.
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Register and log in users",
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

# CORS middleware - the storefront UI runs on a different origin
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

@app.exception_handler(StorefrontException)
async def handle_storefront_exception(request: Request, exc: StorefrontException):
    """Handle custom Storefront exceptions."""
    return await storefront_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    """Handle malformed requests rejected by FastAPI itself."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "message": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            }
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Registration and login
app.include_router(
    auth_routes.router,
    prefix="/auth",
    tags=["Auth"]
)

# Health check endpoints
app.include_router(
    health.router,
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
        "name": "Storefront API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
    }
