"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Callable
from pathlib import Path
from uuid import UUID, uuid4

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import (
    Base,
    LinkModel,
    ThemeSettingsModel,
    profile_table,
)
from infrastructure.database.repositories.sqlalchemy_profile_repo import PROFILE_ENTITY
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.database.table_resolver import TableResolver

# Test database URL (SQLite in memory, one shared connection per engine)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

PROFILE_TABLE_CANDIDATES = ["profiles", "Perfiles"]


async def _create_engine() -> AsyncEngine:
    return create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Test database with the current schema (profile table named ``profiles``)."""
    engine = await _create_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def legacy_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Test database from before the rename: the profile table is ``Perfiles``."""
    engine = await _create_engine()

    def create_legacy_schema(sync_conn):  # type: ignore[no-untyped-def]
        profile_table("Perfiles").create(sync_conn)
        Base.metadata.create_all(
            sync_conn,
            tables=[ThemeSettingsModel.__table__, LinkModel.__table__],
        )

    async with engine.begin() as conn:
        await conn.run_sync(create_legacy_schema)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def legacy_session_factory(legacy_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory over the legacy schema."""
    return async_sessionmaker(bind=legacy_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def resolver() -> TableResolver:
    """A fresh resolver, so memoized table names never leak between tests."""
    return TableResolver({PROFILE_ENTITY: PROFILE_TABLE_CANDIDATES})


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession], resolver: TableResolver
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """Unit of Work factory bound to the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory, resolver)

    return factory


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def test_user() -> TokenUser:
    """Create a test user."""
    return TokenUser(id=uuid4(), email="jane.doe@example.com")


@pytest.fixture
def other_user() -> TokenUser:
    """A second, unrelated user."""
    return TokenUser(id=uuid4(), email="someone@example.com")


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def auth_token(auth_provider: JWTAuthProvider, test_user: TokenUser) -> str:
    """Create auth token for test user."""
    return str(auth_provider.create_token(test_user))


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers."""
    return {"Authorization": f"Bearer {auth_token}"}


async def seed_theme(
    session_factory: async_sessionmaker[AsyncSession], profile_id: UUID, **overrides: object
) -> None:
    """Insert the theme row the backend would normally provision."""
    async with session_factory() as session:
        session.add(ThemeSettingsModel(profile_id=profile_id, **overrides))
        await session.commit()


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    resolver: TableResolver,
    auth_provider: JWTAuthProvider,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client wired to the in-memory database.

    Requests are anonymous unless they carry ``auth_headers``; tokens are
    validated for real by the test auth provider.
    """
    from api.dependencies.auth import get_auth_provider
    from api.v1.dependencies import (
        get_profile_service,
        get_public_profile_service,
        get_table_resolver,
    )
    from domain.services.profile_service import ProfileService
    from domain.services.public_profile_service import PublicProfileService
    from infrastructure.database.session import get_async_session
    from main import create_app

    app = create_app()

    async def override_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_session

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_table_resolver] = lambda: resolver
    app.dependency_overrides[get_profile_service] = lambda: ProfileService(uow_factory)
    app.dependency_overrides[get_public_profile_service] = lambda: PublicProfileService(
        uow_factory
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
