"""Profile repository protocol."""

from typing import Any, Protocol
from uuid import UUID

from domain.entities.profile import Profile, PublicProfile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get_by_owner(self, owner_id: UUID) -> Profile | None:
        """Get the profile owned by an identity."""
        ...

    async def get_public_by_username(self, username: str) -> PublicProfile | None:
        """Get the public projection of a profile by username."""
        ...

    async def username_taken(self, username: str, exclude_owner_id: UUID) -> bool:
        """Check whether another owner already uses the username."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Insert a new profile and return the stored row."""
        ...

    async def update_fields(self, owner_id: UUID, changes: dict[str, Any]) -> int:
        """Apply a partial update to the owner's profile, returning affected rows."""
        ...
