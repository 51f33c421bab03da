"""FastAPI application factory.

Run with ``uvicorn orgguard.main:create_app --factory``.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from orgguard import __version__
from orgguard.api.router import api_router
from orgguard.config import settings
from orgguard.core.database import async_engine
from orgguard.core.errors import register_exception_handlers
from orgguard.core.logging import (
    RequestIdMiddleware,
    RequestLoggingMiddleware,
    configure_logging,
)


logger = structlog.get_logger()

DEV_CORS_ORIGINS = ["http://localhost:3000", "http://localhost:5173"]


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info(
        "application_startup",
        app_name=settings.app_name,
        environment=settings.environment,
        database_backend=async_engine.dialect.name,
    )
    yield
    await async_engine.dispose()
    logger.info("application_shutdown")


def _add_middleware(app: FastAPI) -> None:
    cors_origins = settings.cors_origins
    if settings.is_development and not cors_origins:
        cors_origins = DEV_CORS_ORIGINS

    # Starlette runs the last-added middleware first
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID", settings.identity_header],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIdMiddleware)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    configure_logging(settings.log_level, json_logs=settings.is_production)

    docs_enabled = not settings.is_production
    app = FastAPI(
        title=settings.app_name,
        description="Organization membership and role-based authorization",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )

    _add_middleware(app)
    register_exception_handlers(app)
    app.include_router(api_router)

    return app
