"""SQLAlchemy Unit of Work implementation."""

from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.exceptions import DataServiceError
from domain.repositories.table_resolver import ITableResolver
from infrastructure.database.errors import describe
from infrastructure.database.repositories.sqlalchemy_link_repo import SQLAlchemyLinkRepository
from infrastructure.database.repositories.sqlalchemy_profile_repo import (
    SQLAlchemyProfileRepository,
)
from infrastructure.database.repositories.sqlalchemy_theme_repo import SQLAlchemyThemeRepository


class SQLAlchemyUnitOfWork:
    """Unit of Work implementation using SQLAlchemy."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        resolver: ITableResolver,
    ) -> None:
        self._session_factory = session_factory
        self._resolver = resolver
        self._session: Optional[AsyncSession] = None

    @property
    def profiles(self) -> SQLAlchemyProfileRepository:
        """Get profile repository."""
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return SQLAlchemyProfileRepository(self._session, self._resolver)

    @property
    def themes(self) -> SQLAlchemyThemeRepository:
        """Get theme settings repository."""
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return SQLAlchemyThemeRepository(self._session)

    @property
    def links(self) -> SQLAlchemyLinkRepository:
        """Get link repository."""
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return SQLAlchemyLinkRepository(self._session)

    async def commit(self) -> None:
        """Commit the current transaction."""
        if self._session:
            try:
                await self._session.commit()
            except SQLAlchemyError as exc:
                raise DataServiceError("commit", describe(exc)) from exc

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        if self._session:
            await self._session.rollback()

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        """Enter the context manager and create session."""
        self._session = self._session_factory()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[Exception],
        exc_tb: Any,
    ) -> None:
        """Exit the context manager and cleanup."""
        if self._session:
            if exc_type:
                await self.rollback()
            await self._session.close()
            self._session = None
