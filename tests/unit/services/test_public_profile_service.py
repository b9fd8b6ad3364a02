"""Unit tests for PublicProfileService."""

from uuid import uuid4

import pytest

from core.exceptions import ProfileNotFoundError, ThemeNotFoundError
from domain.entities.profile import Link, PublicProfile, ThemeSettings
from domain.services.public_profile_service import PublicProfileService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> PublicProfileService:
    return PublicProfileService(lambda: uow)


@pytest.fixture
def public_profile() -> PublicProfile:
    return PublicProfile(id=uuid4(), username="jane", title="Designer")


class TestReadPublic:
    @pytest.mark.asyncio
    async def test_returns_profile_theme_and_active_links(
        self, service: PublicProfileService, uow: FakeUnitOfWork, public_profile: PublicProfile
    ):
        theme = ThemeSettings(profile_id=public_profile.id)
        link = Link(title="Site", url="https://example.com", profile_id=public_profile.id)
        uow.profiles.get_public_by_username.return_value = public_profile
        uow.themes.get_for_profile.return_value = theme
        uow.links.get_for_profile.return_value = [link]

        view = await service.read_public("jane")

        assert view.profile is public_profile
        assert view.theme is theme
        assert view.links == [link]
        uow.profiles.get_public_by_username.assert_called_once_with("jane")
        uow.links.get_for_profile.assert_called_once_with(public_profile.id, active_only=True)

    @pytest.mark.asyncio
    async def test_unknown_username(self, service: PublicProfileService, uow: FakeUnitOfWork):
        uow.profiles.get_public_by_username.return_value = None

        with pytest.raises(ProfileNotFoundError) as exc_info:
            await service.read_public("ghost")

        assert exc_info.value.details == {"username": "ghost"}
        uow.themes.get_for_profile.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_theme(
        self, service: PublicProfileService, uow: FakeUnitOfWork, public_profile: PublicProfile
    ):
        uow.profiles.get_public_by_username.return_value = public_profile
        uow.themes.get_for_profile.return_value = None

        with pytest.raises(ThemeNotFoundError):
            await service.read_public("jane")

        uow.links.get_for_profile.assert_not_called()

    @pytest.mark.asyncio
    async def test_never_writes(
        self, service: PublicProfileService, uow: FakeUnitOfWork, public_profile: PublicProfile
    ):
        uow.profiles.get_public_by_username.return_value = public_profile
        uow.themes.get_for_profile.return_value = ThemeSettings(profile_id=public_profile.id)
        uow.links.get_for_profile.return_value = []

        await service.read_public("jane")

        uow.profiles.create.assert_not_called()
        assert not uow.committed
