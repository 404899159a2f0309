"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from user_management import __version__
from user_management.api.router import api_router
from user_management.config import Settings, get_settings
from user_management.core.audit import setup_audit_listeners
from user_management.core.database import get_engine, get_session_factory, init_models
from user_management.core.errors import register_exception_handlers
from user_management.core.logging import (
    RequestIdMiddleware,
    RequestLoggingMiddleware,
    configure_logging,
)
from user_management.modules.users.seed import seed_users
from user_management.web import templates, web_router


logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Handles startup and shutdown events.
    """
    settings: Settings = app.state.settings

    # Startup
    logger.info(
        "application_startup",
        app_name=settings.app_name,
        environment=settings.environment,
        audit_mode=settings.audit_mode,
    )

    # Schema and fixture users for throwaway stores
    if settings.database_create_all:
        await init_models(get_engine())
        async with get_session_factory()() as session:
            await seed_users(session)
            await session.commit()
        logger.info("database_initialized")

    yield

    # Shutdown
    logger.info("application_shutdown")
    await get_engine().dispose()
    logger.info("database_engine_disposed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to run with; defaults to the environment's

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="User management with an automatic audit trail",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
        # Disable docs in production
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
    )
    app.state.settings = settings
    app.state.templates = templates

    cors_origins = settings.cors_origins
    if settings.is_development and not cors_origins:
        cors_origins = ["http://localhost:3000", "http://localhost:5173"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
    )

    # Add request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Add request ID middleware (outermost, runs first)
    app.add_middleware(RequestIdMiddleware)

    register_exception_handlers(app)

    # Audit interceptor for AuditedSession flushes
    setup_audit_listeners()

    app.include_router(api_router)
    app.include_router(web_router)

    return app
