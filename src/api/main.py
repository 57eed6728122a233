"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures logging, and manages lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from psycopg_pool import AsyncConnectionPool

from src.adapters.codes import InMemoryVerificationCodeStore
from src.adapters.repository import (
    InMemoryAccountRepository,
    PostgresAccountRepository,
    run_migrations,
)
from src.api.dependencies import build_notifiers
from src.api.v1 import router as v1_router
from src.config.settings import get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Account onboarding API v1 - Register, verify contacts, create PIN and log in",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates the account repository (and its connection pool)
    - Runs migrations on startup
    - Creates the single verification code store and notifiers
    - Closes connection pool and drops stored codes on shutdown
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    logger.info("Starting application...")

    pool: AsyncConnectionPool | None = None
    if settings.repository_backend == "postgres":
        logger.info("Connecting to database...")
        pool = AsyncConnectionPool(
            conninfo=settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
            open=False,
        )
        await pool.open()

        logger.info("Running database migrations...")
        await run_migrations(pool)
        app.state.repository = PostgresAccountRepository(pool)
    else:
        logger.warning("Using in-memory account repository; accounts are not persisted")
        app.state.repository = InMemoryAccountRepository()

    code_store = InMemoryVerificationCodeStore()
    app.state.code_store = code_store
    app.state.email_sender, app.state.sms_sender = build_notifiers(settings)

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    code_store.clear()
    if pool is not None:
        await pool.close()
        logger.info("Database connection pool closed")


app = FastAPI(
    title="tentera",
    description="Account onboarding and authentication API",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Include v1 API routes
app.include_router(v1_router, prefix="/v1")


@app.get("/health")
async def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint with repository validation.

    Returns 200 OK if application and repository are healthy.
    Raises exception if database connection fails.
    """
    await request.app.state.repository.ping()
    return {"status": "healthy"}
