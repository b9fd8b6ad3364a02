"""Profile service: owner load-or-create and write-through mutations."""

from collections.abc import Callable
from dataclasses import replace
from typing import Any, Optional
from uuid import UUID, uuid4

import structlog

from core.exceptions import (
    AuthenticationError,
    DataServiceError,
    ProfileLoadError,
    ProfileNotFoundError,
    ThemeNotFoundError,
    UsernameTakenError,
)
from domain.entities.identity import Identity
from domain.entities.profile import (
    PROFILE_MUTABLE_FIELDS,
    THEME_MUTABLE_FIELDS,
    Link,
    OwnerProfile,
    Profile,
    default_username,
    with_dense_order,
)
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


def require_identity(identity: Optional[Identity]) -> Identity:
    """Fail fast when there is no authenticated caller."""
    if identity is None:
        raise AuthenticationError()
    return identity


class ProfileService:
    """Service layer for the owner's profile, theme and links.

    Identity is an explicit argument of every operation and is checked
    before any remote call. Nothing is retried: each failure is raised
    once for the caller to handle.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def load_or_create(self, identity: Optional[Identity]) -> OwnerProfile | None:
        """Load the caller's profile, theme and links, creating the profile if absent.

        Returns None for an anonymous caller. The returned value has
        ``created=True`` when this call inserted the profile row. Theme
        settings are never created here; a missing row yields ``theme=None``.

        Raises:
            ProfileLoadError: If a query or the profile insert fails.
            SchemaMismatchError: If no profile table candidate exists.
        """
        if identity is None:
            return None

        try:
            async with self._uow_factory() as uow:
                created = False
                profile = await uow.profiles.get_by_owner(identity.id)

                if profile is None:
                    profile = await uow.profiles.create(
                        Profile(
                            owner_id=identity.id,
                            username=default_username(identity.email),
                        )
                    )
                    await uow.commit()
                    created = True
                    logger.info(
                        "profile_created",
                        profile_id=str(profile.id),
                        owner_id=str(identity.id),
                        username=profile.username,
                    )

                theme = await uow.themes.get_for_profile(profile.id)
                links = await uow.links.get_for_profile(profile.id)
        except DataServiceError as exc:
            logger.warning(
                "profile_load_failed",
                owner_id=str(identity.id),
                operation=exc.details["operation"],
            )
            raise ProfileLoadError(exc.details["reason"]) from exc

        return OwnerProfile(profile=profile, theme=theme, links=links, created=created)

    async def update_profile(
        self, identity: Optional[Identity], changes: dict[str, Any]
    ) -> dict[str, Any]:
        """Partially update the caller's profile.

        Returns the changes that were written, for the caller to merge into
        its own copy. Fields outside the mutable set are dropped.
        """
        identity = require_identity(identity)
        changes = {k: v for k, v in changes.items() if k in PROFILE_MUTABLE_FIELDS}
        if not changes:
            return {}

        async with self._uow_factory() as uow:
            username = changes.get("username")
            if username is not None and await uow.profiles.username_taken(
                username, identity.id
            ):
                raise UsernameTakenError(username)

            updated = await uow.profiles.update_fields(identity.id, changes)
            if not updated:
                raise ProfileNotFoundError()
            await uow.commit()

        logger.info("profile_updated", owner_id=str(identity.id), fields=sorted(changes))
        return changes

    async def update_theme(
        self, identity: Optional[Identity], profile_id: UUID, changes: dict[str, Any]
    ) -> dict[str, Any]:
        """Partially update the theme of the caller's profile.

        Raises:
            ThemeNotFoundError: If the profile has no theme row yet.
        """
        identity = require_identity(identity)
        changes = {k: v for k, v in changes.items() if k in THEME_MUTABLE_FIELDS}

        async with self._uow_factory() as uow:
            await self._require_owned_profile(uow, identity, profile_id)
            if not changes:
                return {}

            updated = await uow.themes.update_fields(profile_id, changes)
            if not updated:
                raise ThemeNotFoundError(str(profile_id))
            await uow.commit()

        logger.info("theme_updated", profile_id=str(profile_id), fields=sorted(changes))
        return changes

    async def replace_links(
        self, identity: Optional[Identity], profile_id: UUID, links: list[Link]
    ) -> list[Link]:
        """Replace the whole link collection of the caller's profile.

        ``display_order`` is re-derived from list position. An incoming id is
        kept only when it names one of this profile's current links; any
        other id is replaced with a fresh one. The delete and the insert
        share one transaction, so a failed insert leaves the previous
        collection in place.
        """
        identity = require_identity(identity)

        async with self._uow_factory() as uow:
            await self._require_owned_profile(uow, identity, profile_id)
            current_ids = {link.id for link in await uow.links.get_for_profile(profile_id)}
            ordered = with_dense_order(
                [link if link.id in current_ids else replace(link, id=uuid4()) for link in links],
                profile_id,
            )
            removed = await uow.links.delete_all_for_profile(profile_id)
            await uow.links.create_many(ordered)
            await uow.commit()

        logger.info(
            "links_replaced",
            profile_id=str(profile_id),
            removed=removed,
            inserted=len(ordered),
        )
        return ordered

    async def _require_owned_profile(
        self, uow: IUnitOfWork, identity: Identity, profile_id: UUID
    ) -> Profile:
        """Verify the profile exists and belongs to the caller."""
        profile = await uow.profiles.get_by_owner(identity.id)
        if profile is None or profile.id != profile_id:
            raise ProfileNotFoundError()
        return profile
