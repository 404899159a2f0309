"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from user_management.config import Settings, get_settings
from user_management.core.audit import setup_audit_listeners
from user_management.core.audit.models import AuditLog  # noqa: F401
from user_management.core.database import (
    Base,
    build_session_factory,
    create_engine_for,
    get_db,
)
from user_management.main import create_app

# Import all models to ensure they're registered with Base.metadata
from user_management.modules.users.models import User
from user_management.modules.users.seed import seed_users


# Each test gets its own private in-memory database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(autouse=True, scope="session")
def audit_listeners() -> None:
    """Attach the audit interceptor once for the whole run."""
    setup_audit_listeners()


@pytest.fixture
def audit_mode() -> str:
    """Audit mode under test; modules override this fixture to switch."""
    return "interceptor"


@pytest.fixture
def settings(audit_mode: str) -> Settings:
    """Settings for an isolated test run."""
    return Settings(
        environment="test",
        database_url=TEST_DATABASE_URL,
        audit_mode=audit_mode,
        database_create_all=False,
    )


@pytest.fixture(scope="function")
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create test database engine."""
    engine = create_engine_for(TEST_DATABASE_URL)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def db(engine: AsyncEngine, settings: Settings) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session for tests.

    Interceptor-mode sessions are ``AuditedSession`` instances, exactly as
    the application builds them.
    """
    session_factory = build_session_factory(engine, audited=settings.audited_sessions)

    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def seeded_users(db: AsyncSession) -> list[User]:
    """The eleven fixture users, with IDs 1 to 11."""
    return await seed_users(db)


@pytest.fixture
async def app(db: AsyncSession, settings: Settings):
    """Create test application instance."""
    application = create_app(settings)

    # Override database dependency
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_settings] = lambda: settings

    yield application

    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API and page testing.

    Unhandled errors are returned as responses rather than re-raised, so
    the 500 handler can be asserted on.
    """
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def anyio_backend() -> str:
    """Specify the async backend for anyio."""
    return "asyncio"
