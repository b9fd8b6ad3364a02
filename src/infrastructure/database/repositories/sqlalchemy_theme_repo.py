"""SQLAlchemy implementation of ThemeSettings repository."""

from typing import Any
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import ThemeSettings
from infrastructure.database.errors import translate_errors
from infrastructure.database.models import ThemeSettingsModel


class SQLAlchemyThemeRepository:
    """SQLAlchemy implementation of IThemeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @translate_errors("theme.get_for_profile")
    async def get_for_profile(self, profile_id: UUID) -> ThemeSettings | None:
        """Get the theme of a profile."""
        stmt = select(ThemeSettingsModel).where(ThemeSettingsModel.profile_id == profile_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    @translate_errors("theme.update")
    async def update_fields(self, profile_id: UUID, changes: dict[str, Any]) -> int:
        """Apply a partial update to a profile's theme, returning affected rows."""
        stmt = (
            update(ThemeSettingsModel)
            .where(ThemeSettingsModel.profile_id == profile_id)
            .values(**changes)
        )
        result = await self._session.execute(stmt)
        return result.rowcount  # type: ignore[attr-defined, no-any-return]

    def _to_entity(self, model: ThemeSettingsModel) -> ThemeSettings:
        """Convert ORM model to domain entity."""
        return ThemeSettings(
            id=model.id,
            profile_id=model.profile_id,
            bg_type=model.bg_type,
            bg_color=model.bg_color,
            bg_image_url=model.bg_image_url,
            button_style=model.button_style,
            button_bg_color=model.button_bg_color,
            button_text_color=model.button_text_color,
            button_shadow=model.button_shadow,
            font_family=model.font_family,
            text_color=model.text_color,
        )
