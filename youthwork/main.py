"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from youthwork.api.v1.router import api_router
from youthwork.core.config import settings
from youthwork.core.logging import setup_logging
from youthwork.middleware.rate_limit import (
    RateLimitMiddleware,
    create_counter_store,
    rate_limits_from_settings,
)
from youthwork.rules.tables import get_rule_tables

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info(f"Starting Youth Work Compliance API (env={settings.env})")

    # Fail fast on a broken ruleset rather than on the first request
    tables = get_rule_tables()
    logger.info(f"Rule tables ready: {tables.id} v{tables.version}")

    yield

    logger.info("Shutting down Youth Work Compliance API")


app = FastAPI(
    title="Youth Work Compliance API",
    description="Youth labour compliance and age eligibility for workers aged 15-20",
    version="0.1.0",
    docs_url="/docs" if settings.is_dev else None,
    redoc_url="/redoc" if settings.is_dev else None,
    openapi_url="/openapi.json" if settings.is_dev else None,
    lifespan=lifespan,
)

# Add rate limiting middleware
app.add_middleware(
    RateLimitMiddleware,
    rate_limits=rate_limits_from_settings(settings),
    store=create_counter_store(settings.rate_limit_storage_url),
    enabled=settings.rate_limit_enabled,
)

if settings.is_dev:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unhandled exceptions."""
    logger.exception(f"Unhandled exception: {exc}")

    # Don't expose internal errors in production
    if settings.is_prod:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)},
    )


app.include_router(api_router, prefix="/api/v1")


@app.get("/", include_in_schema=False)
async def root() -> dict:
    """Root endpoint with service info."""
    return {
        "service": "Youth Work Compliance API",
        "version": "0.1.0",
        "docs": "/docs" if settings.is_dev else "Disabled in production",
    }
