"""
Labor Ledger - Main Application Entry Point

Payroll and labor cost calculation API for restaurant back offices.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.config import get_settings
from backend.middleware.request_log import RequestLogMiddleware
from backend.routers.v1 import checks, labor, payroll, punches, tips

settings = get_settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup/shutdown events."""
    logger.info("%s %s starting (%s)", settings.app_name, settings.app_version, settings.environment)
    yield
    logger.info("%s shutting down", settings.app_name)


app = FastAPI(
    title=settings.app_name,
    description=(
        "Turns time punches, compensation, and tips into pay. "
        "Payroll runs and dashboard labor cost share one calculation engine "
        "and reconcile to the cent."
    ),
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/api/docs" if settings.debug else None,
    redoc_url="/api/redoc" if settings.debug else None,
    openapi_url="/api/openapi.json" if settings.debug else None,
)

# Request logging middleware (outermost, captures all requests)
app.add_middleware(RequestLogMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health check endpoints
@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "laborledger-api"}


@app.get("/health/ready", tags=["Health"])
async def readiness_check() -> dict[str, str]:
    """Readiness check. The service is stateless, so ready means up."""
    return {
        "status": "ready",
        "service": "laborledger-api",
        "version": settings.app_version,
        "environment": settings.environment,
    }


# API v1 routes
app.include_router(
    payroll.router,
    prefix=f"{settings.api_v1_prefix}/payroll",
    tags=["Payroll"],
)
app.include_router(
    labor.router,
    prefix=f"{settings.api_v1_prefix}/labor",
    tags=["Labor Cost"],
)
app.include_router(
    tips.router,
    prefix=f"{settings.api_v1_prefix}/tips",
    tags=["Tips"],
)
app.include_router(
    punches.router,
    prefix=f"{settings.api_v1_prefix}/punches",
    tags=["Time Punches"],
)
app.include_router(
    checks.router,
    prefix=f"{settings.api_v1_prefix}/checks",
    tags=["Checks"],
)
