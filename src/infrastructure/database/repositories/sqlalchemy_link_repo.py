"""SQLAlchemy implementation of Link repository."""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import Link
from infrastructure.database.errors import translate_errors
from infrastructure.database.models import LinkModel


class SQLAlchemyLinkRepository:
    """SQLAlchemy implementation of ILinkRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @translate_errors("links.get_for_profile")
    async def get_for_profile(self, profile_id: UUID, active_only: bool = False) -> list[Link]:
        """Get a profile's links ordered by display_order."""
        stmt = select(LinkModel).where(LinkModel.profile_id == profile_id)
        if active_only:
            stmt = stmt.where(LinkModel.is_active.is_(True))
        stmt = stmt.order_by(LinkModel.display_order.asc())
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    @translate_errors("links.delete_all")
    async def delete_all_for_profile(self, profile_id: UUID) -> int:
        """Delete every link of a profile, returning the number removed."""
        stmt = delete(LinkModel).where(LinkModel.profile_id == profile_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount  # type: ignore[attr-defined, no-any-return]

    @translate_errors("links.create_many")
    async def create_many(self, links: list[Link]) -> list[Link]:
        """Insert links as given."""
        if not links:
            return []

        models = [self._to_model(link) for link in links]
        self._session.add_all(models)
        await self._session.flush()
        return [self._to_entity(model) for model in models]

    def _to_entity(self, model: LinkModel) -> Link:
        """Convert ORM model to domain entity."""
        return Link(
            id=model.id,
            profile_id=model.profile_id,
            title=model.title,
            url=model.url,
            icon_class=model.icon_class,
            is_active=model.is_active,
            display_order=model.display_order,
        )

    def _to_model(self, entity: Link) -> LinkModel:
        """Convert domain entity to ORM model."""
        return LinkModel(
            id=entity.id,
            profile_id=entity.profile_id,
            title=entity.title,
            url=entity.url,
            icon_class=entity.icon_class,
            is_active=entity.is_active,
            display_order=entity.display_order,
        )
