"""Shared fixtures for unit tests."""

from dataclasses import dataclass
from typing import Any, Optional
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.profile import Profile, ThemeSettings


class FakeUnitOfWork:
    """Fake Unit of Work with profile, theme and link repository mocks."""

    def __init__(self) -> None:
        self.profiles = AsyncMock()
        self.themes = AsyncMock()
        self.links = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@dataclass
class FakeIdentity:
    """Minimal authenticated caller."""

    id: UUID
    email: Optional[str] = None


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def identity(user_id: UUID) -> FakeIdentity:
    """The authenticated caller."""
    return FakeIdentity(id=user_id, email="jane.doe@example.com")


@pytest.fixture
def profile(user_id: UUID) -> Profile:
    """An existing profile owned by the caller."""
    return Profile(owner_id=user_id, username="jane")


@pytest.fixture
def theme(profile: Profile) -> ThemeSettings:
    """Default theme of the caller's profile."""
    return ThemeSettings(profile_id=profile.id)
