"""Owner-side profile state kept in step with the data service."""

from typing import Any, Optional

from core.exceptions import AppException, ProfileNotFoundError
from domain.entities.identity import Identity
from domain.entities.profile import Link, OwnerProfile, Profile, ThemeSettings
from domain.services.profile_service import ProfileService, require_identity


class ProfileSession:
    """Local copy of the owner's profile, theme and links.

    Mutations are written to the data service first and mirrored into the
    local copy only when the write succeeds; a failed write leaves the
    local copy untouched. A single writer per profile is assumed.
    """

    def __init__(self, service: ProfileService) -> None:
        self._service = service
        self.profile: Profile | None = None
        self.theme: ThemeSettings | None = None
        self.links: list[Link] = []
        self.created = False

    @property
    def is_loaded(self) -> bool:
        return self.profile is not None

    def clear(self) -> None:
        self.profile = None
        self.theme = None
        self.links = []
        self.created = False

    async def load(self, identity: Optional[Identity]) -> OwnerProfile | None:
        """Populate local state for the caller, creating the profile on first access.

        An anonymous caller leaves the session empty. A failed load also
        leaves it empty before the error propagates.
        """
        try:
            loaded = await self._service.load_or_create(identity)
        except AppException:
            self.clear()
            raise

        if loaded is None:
            self.clear()
            return None

        self.profile = loaded.profile
        self.theme = loaded.theme
        self.links = list(loaded.links)
        self.created = loaded.created
        return loaded

    async def update_profile(self, identity: Optional[Identity], changes: dict[str, Any]) -> Profile:
        identity = require_identity(identity)
        profile = self._require_profile()
        applied = await self._service.update_profile(identity, changes)
        self.profile = profile.merged(applied)
        return self.profile

    async def update_theme(
        self, identity: Optional[Identity], changes: dict[str, Any]
    ) -> ThemeSettings | None:
        identity = require_identity(identity)
        profile = self._require_profile()
        applied = await self._service.update_theme(identity, profile.id, changes)
        if self.theme is not None:
            self.theme = self.theme.merged(applied)
        return self.theme

    async def replace_links(self, identity: Optional[Identity], links: list[Link]) -> list[Link]:
        identity = require_identity(identity)
        profile = self._require_profile()
        self.links = await self._service.replace_links(identity, profile.id, links)
        return self.links

    def _require_profile(self) -> Profile:
        if self.profile is None:
            raise ProfileNotFoundError()
        return self.profile
