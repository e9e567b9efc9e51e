"""
Division SMS API - Main Application Entry Point

This module initializes and configures the FastAPI application including:
- Logging
- Database and Redis connections
- CORS and request logging middleware
- Service error handling
- API routing
- Health check endpoints
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from division_sms.api import api_router
from division_sms.core.config import settings
from division_sms.core.database import async_session_maker, close_db, init_db
from division_sms.core.logging import RequestLoggingMiddleware, setup_logging
from division_sms.core.redis import close_redis, init_redis, is_redis_available
from division_sms.modules.shared.errors import ServiceError, service_error_handler

logger = logging.getLogger("division_sms")


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """
    Application lifespan manager.

    Redis is optional outside production: the thresholds cache is skipped
    and rate limiting falls back to process memory.
    """
    setup_logging()
    logger.info(f"Starting Division SMS API in {settings.python_env} mode...")

    try:
        await init_redis()
        logger.info("[OK] Redis connected")
    except Exception as e:
        logger.error(f"[FAIL] Redis connection failed: {e}")
        if settings.is_production:
            raise

    try:
        await init_db()
        logger.info("[OK] Database connected")
    except Exception as e:
        logger.error(f"[FAIL] Database connection failed: {e}")
        if settings.is_production:
            raise

    yield  # Application runs here

    logger.info("Shutting down Division SMS API...")
    await close_redis()
    await close_db()
    logger.info("[OK] Cleanup complete")


app = FastAPI(
    title="Division SMS API",
    description="DepEd Division School Management System API",
    version="0.1.0",
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

app.include_router(api_router, prefix="/api/v1")
app.add_exception_handler(ServiceError, service_error_handler)

app.add_middleware(RequestLoggingMiddleware)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """Root endpoint - API welcome message."""
    return {
        "message": "Welcome to Division SMS API",
        "status": "running",
        "environment": settings.python_env,
    }


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint for container orchestration."""
    return {"status": "healthy"}


@app.get("/ready", tags=["Health"])
async def readiness_check() -> dict[str, str]:
    """
    Readiness check: the database answers a trivial query.

    Redis is reported alongside. Its absence only fails readiness in
    production, where rate limits must be shared across workers.
    """
    redis_status = "connected" if is_redis_available() else "unavailable"
    try:
        async with async_session_maker() as session:
            await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Readiness check failed: {e}")
        return {"status": "not ready", "database": "unavailable", "redis": redis_status}

    if settings.is_production and not is_redis_available():
        return {"status": "not ready", "database": "connected", "redis": redis_status}
    return {"status": "ready", "database": "connected", "redis": redis_status}
