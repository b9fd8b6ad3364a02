"""Theme settings repository protocol."""

from typing import Any, Protocol
from uuid import UUID

from domain.entities.profile import ThemeSettings


class IThemeRepository(Protocol):
    """Repository interface for ThemeSettings entities."""

    async def get_for_profile(self, profile_id: UUID) -> ThemeSettings | None:
        """Get the theme of a profile."""
        ...

    async def update_fields(self, profile_id: UUID, changes: dict[str, Any]) -> int:
        """Apply a partial update to a profile's theme, returning affected rows."""
        ...
