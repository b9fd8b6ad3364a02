"""Link repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Link


class ILinkRepository(Protocol):
    """Repository interface for Link entities."""

    async def get_for_profile(self, profile_id: UUID, active_only: bool = False) -> list[Link]:
        """Get a profile's links ordered by display_order."""
        ...

    async def delete_all_for_profile(self, profile_id: UUID) -> int:
        """Delete every link of a profile, returning the number removed."""
        ...

    async def create_many(self, links: list[Link]) -> list[Link]:
        """Insert links as given."""
        ...
