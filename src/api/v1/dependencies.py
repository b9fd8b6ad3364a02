"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.services.profile_service import ProfileService
from domain.services.public_profile_service import PublicProfileService
from infrastructure.database.repositories.sqlalchemy_profile_repo import PROFILE_ENTITY
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.database.table_resolver import TableResolver


@lru_cache
def get_table_resolver() -> TableResolver:
    """Process-wide table resolver; remembers which candidate answered."""
    return TableResolver({PROFILE_ENTITY: settings.profile_table_candidates_list})


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""
    resolver = get_table_resolver()

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory, resolver)

    return factory


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(get_uow_factory())


@lru_cache
def get_public_profile_service() -> PublicProfileService:
    """Get Public Profile service instance."""
    return PublicProfileService(get_uow_factory())
