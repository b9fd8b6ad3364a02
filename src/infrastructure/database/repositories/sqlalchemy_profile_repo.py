"""SQLAlchemy implementation of Profile repository."""

from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any, TypeVar
from uuid import UUID

from sqlalchemy import Row, Table, func, insert, select, update
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import PUBLIC_PROFILE_FIELDS, Profile, PublicProfile
from domain.repositories.table_resolver import ITableResolver
from infrastructure.database.errors import translate_errors
from infrastructure.database.models import profile_table

T = TypeVar("T")

PROFILE_ENTITY = "profile"


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository.

    Every statement goes through the table resolver because the physical
    table name is only known at runtime. A failed candidate leaves a
    PostgreSQL transaction aborted, so the session is rolled back before
    the resolver tries the next name. Profile statements therefore run
    before any other write in the same unit of work.
    """

    def __init__(self, session: AsyncSession, resolver: ITableResolver) -> None:
        self._session = session
        self._resolver = resolver

    async def _on_profile_table(self, query: Callable[[Table], Awaitable[T]]) -> T:
        async def attempt(name: str) -> T:
            try:
                return await query(profile_table(name))
            except DBAPIError:
                await self._session.rollback()
                raise

        return await self._resolver.resolve(PROFILE_ENTITY, attempt)

    @translate_errors("profile.get_by_owner")
    async def get_by_owner(self, owner_id: UUID) -> Profile | None:
        """Get the profile owned by an identity."""

        async def query(table: Table) -> Profile | None:
            stmt = select(table).where(table.c.owner_id == owner_id)
            result = await self._session.execute(stmt)
            row = result.one_or_none()
            return self._to_entity(row) if row else None

        return await self._on_profile_table(query)

    @translate_errors("profile.get_public_by_username")
    async def get_public_by_username(self, username: str) -> PublicProfile | None:
        """Get the public projection of a profile by username."""

        async def query(table: Table) -> PublicProfile | None:
            columns = [table.c[name] for name in PUBLIC_PROFILE_FIELDS]
            stmt = select(*columns).where(table.c.username == username)
            result = await self._session.execute(stmt)
            row = result.one_or_none()
            return PublicProfile(**row._mapping) if row else None

        return await self._on_profile_table(query)

    @translate_errors("profile.username_taken")
    async def username_taken(self, username: str, exclude_owner_id: UUID) -> bool:
        """Check whether another owner already uses the username."""

        async def query(table: Table) -> bool:
            stmt = (
                select(func.count())
                .select_from(table)
                .where(
                    table.c.username == username,
                    table.c.owner_id != exclude_owner_id,
                )
            )
            result = await self._session.execute(stmt)
            return bool(result.scalar())

        return await self._on_profile_table(query)

    @translate_errors("profile.create")
    async def create(self, profile: Profile) -> Profile:
        """Insert a new profile and return the stored row."""

        async def query(table: Table) -> Profile:
            stmt = insert(table).values(**self._to_row(profile)).returning(table)
            result = await self._session.execute(stmt)
            return self._to_entity(result.one())

        return await self._on_profile_table(query)

    @translate_errors("profile.update")
    async def update_fields(self, owner_id: UUID, changes: dict[str, Any]) -> int:
        """Apply a partial update to the owner's profile, returning affected rows."""

        async def query(table: Table) -> int:
            stmt = (
                update(table)
                .where(table.c.owner_id == owner_id)
                .values(**changes, updated_at=datetime.utcnow())
            )
            result = await self._session.execute(stmt)
            return result.rowcount  # type: ignore[attr-defined, no-any-return]

        return await self._on_profile_table(query)

    def _to_entity(self, row: Row[Any]) -> Profile:
        """Convert a table row to a domain entity."""
        data = row._mapping
        return Profile(
            id=data["id"],
            owner_id=data["owner_id"],
            username=data["username"],
            title=data["title"],
            role=data["role"],
            company=data["company"],
            bio=data["bio"],
            profile_picture_url=data["profile_picture_url"],
            cover_image_url=data["cover_image_url"],
            contact_email=data["contact_email"],
            contact_phone=data["contact_phone"],
            contact_location=data["contact_location"],
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )

    def _to_row(self, entity: Profile) -> dict[str, Any]:
        """Convert a domain entity to insertable column values."""
        return {
            "id": entity.id,
            "owner_id": entity.owner_id,
            "username": entity.username,
            "title": entity.title,
            "role": entity.role,
            "company": entity.company,
            "bio": entity.bio,
            "profile_picture_url": entity.profile_picture_url,
            "cover_image_url": entity.cover_image_url,
            "contact_email": entity.contact_email,
            "contact_phone": entity.contact_phone,
            "contact_location": entity.contact_location,
            "created_at": entity.created_at,
            "updated_at": entity.updated_at,
        }
