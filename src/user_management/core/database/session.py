"""Async database engine and session management."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from user_management.config import settings
from user_management.core.database.base import Base


class AuditedSession(Session):
    """Session class whose flushes are observed by the audit interceptor.

    The listener itself is attached by
    ``user_management.core.audit.setup_audit_listeners``.
    """


def _is_memory_sqlite(url: str) -> bool:
    return url.startswith("sqlite") and (":memory:" in url or url.endswith("://"))


def create_engine_for(url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine for a database URL.

    In-memory SQLite databases live as long as their connection, so they
    share one connection through ``StaticPool``.

    Args:
        url: Async SQLAlchemy database URL
        echo: Whether to log emitted SQL

    Returns:
        The configured engine
    """
    if _is_memory_sqlite(url):
        return create_async_engine(
            url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    if url.startswith("sqlite"):
        return create_async_engine(url, echo=echo)
    return create_async_engine(
        url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        echo=echo,
        pool_pre_ping=True,  # Verify connections before use
    )


def build_session_factory(
    engine: AsyncEngine,
    audited: bool = True,
) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to an engine.

    Args:
        engine: The async engine
        audited: Use ``AuditedSession`` so user changes are audited on flush

    Returns:
        An async session factory
    """
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        sync_session_class=AuditedSession if audited else Session,
        expire_on_commit=False,
        autoflush=False,
    )


@lru_cache
def get_engine() -> AsyncEngine:
    """Get the process-wide engine, created on first use."""
    return create_engine_for(settings.async_database_url, echo=settings.database_echo)


@lru_cache
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the process-wide session factory, created on first use."""
    return build_session_factory(get_engine(), audited=settings.audited_sessions)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that provides one unit-of-work per request.

    Everything flushed during the request, audit rows included, is
    committed together when the request succeeds and rolled back otherwise.

    Usage:
        @router.get("/items")
        async def list_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_models(engine: AsyncEngine) -> None:
    """Create all tables registered on ``Base.metadata``.

    Used for in-memory development stores; real databases are managed
    by Alembic migrations.

    Args:
        engine: The async engine to create tables with
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
