"""Read-only public profile lookup by username."""

from collections.abc import Callable

from core.exceptions import ProfileNotFoundError, ThemeNotFoundError
from domain.entities.profile import PublicProfileView
from domain.repositories.unit_of_work import IUnitOfWork


class PublicProfileService:
    """Service layer for anonymous profile views."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def read_public(self, username: str) -> PublicProfileView:
        """Get the public subset of a profile, its theme and active links.

        Never creates anything. Contact fields are not selected at all.

        Raises:
            ProfileNotFoundError: If no profile has this username.
            ThemeNotFoundError: If the profile has no theme to render with.
        """
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_public_by_username(username)
            if profile is None:
                raise ProfileNotFoundError(username)

            theme = await uow.themes.get_for_profile(profile.id)
            if theme is None:
                raise ThemeNotFoundError(str(profile.id))

            links = await uow.links.get_for_profile(profile.id, active_only=True)

        return PublicProfileView(profile=profile, theme=theme, links=links)
