"""Async engine and session factory for the profile database."""

from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from core.config import settings


def _connect_args(database_url: str) -> dict[str, Any]:
    # Supavisor runs in transaction mode, where asyncpg's prepared
    # statement cache breaks across pooled connections.
    if "pooler.supabase.com" in database_url or "supabase.com" in database_url:
        return {"statement_cache_size": 0}
    return {}


engine = create_async_engine(
    settings.async_database_url,
    echo=settings.debug,
    pool_pre_ping=True,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    connect_args=_connect_args(settings.database_url),
)

# Sessions never autoflush: a missing-table probe must fail on its own
# statement, not on a pending write flushed ahead of it.
async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session, used by health probes."""
    async with async_session_factory() as session:
        yield session
