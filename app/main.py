# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the School of Ranch dashboard API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   poetry run uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    DashboardException,
    dashboard_exception_handler,
    validation_exception_handler,
)
from app.routers import dashboard, health
from app.auth import routes as auth_routes
from core.services.dashboard_service import DashboardService

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

    Startup: build the fetch configuration once and hand it to the
    dashboard service. A missing SUPABASE_URL is only logged; each
    dashboard fetch reports it.
    """
    logger.info(f"Starting dashboard API in {settings.ENVIRONMENT} mode")
    if not settings.SUPABASE_URL:
        logger.warning("SUPABASE_URL is not set; dashboard fetches will fail")

    app.state.dashboard_service = DashboardService.from_settings(settings)

    yield

    logger.info("Shutting down dashboard API")


# Create FastAPI application
app = FastAPI(
    title="School of Ranch Dashboard API",
    description="""
## Member Dashboard API

Backs the School of Ranch mobile app: sign-in and the member dashboard.

### Sections

| Section | Source |
|---------|--------|
| **My Workshops** | Ticket rows from the data function, grouped by form |
| **My Membership** | Membership rows from the data function |

Dashboard endpoints accept an optional `Authorization: Bearer <token>`
header. Without it the dashboard is empty (not an error).
""",
    version=health.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Sign-in, sign-up, one-time codes and password reset",
        },
        {
            "name": "Dashboard",
            "description": "Workshops and membership for the signed-in member",
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

# CORS middleware - allows cross-origin requests
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

@app.exception_handler(DashboardException)
async def handle_dashboard_exception(request: Request, exc: DashboardException):
    """Handle custom dashboard exceptions."""
    return await dashboard_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    """Handle request body validation errors."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix="/api/v1/auth",
    tags=["Auth"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Dashboard endpoints
app.include_router(
    dashboard.router,
    prefix="/api/v1/dashboard",
    tags=["Dashboard"]
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
        "name": "School of Ranch Dashboard API",
        "version": health.VERSION,
        "docs": "/docs",
        "health": "/api/v1/health",
    }
