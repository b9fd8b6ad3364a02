"""Profile, theme and link domain entities."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import StrEnum
from typing import Any, Optional
from uuid import UUID, uuid4

DEFAULT_USERNAME = "user"

# Columns a caller may change through a partial update. id, owner_id and
# profile_id are fixed once the row exists.
PROFILE_MUTABLE_FIELDS = frozenset(
    {
        "username",
        "title",
        "role",
        "company",
        "bio",
        "profile_picture_url",
        "cover_image_url",
        "contact_email",
        "contact_phone",
        "contact_location",
    }
)

THEME_MUTABLE_FIELDS = frozenset(
    {
        "bg_type",
        "bg_color",
        "bg_image_url",
        "button_style",
        "button_bg_color",
        "button_text_color",
        "button_shadow",
        "font_family",
        "text_color",
    }
)

# Safe to show anonymous visitors; contact fields are owner-only.
PUBLIC_PROFILE_FIELDS = (
    "id",
    "username",
    "title",
    "role",
    "company",
    "bio",
    "profile_picture_url",
    "cover_image_url",
)


class BackgroundType(StrEnum):
    """How the public page background is painted."""

    COLOR = "color"
    IMAGE = "image"


class ButtonStyle(StrEnum):
    """Shape of the link buttons."""

    RECTANGULAR = "rectangular"
    ROUNDED = "rounded"
    PILL = "pill"


def default_username(email: Optional[str]) -> str:
    """Derive the first username from the local part of an email."""
    if email:
        local_part = email.split("@", 1)[0].strip()
        if local_part:
            return local_part
    return DEFAULT_USERNAME


@dataclass
class Profile:
    """Domain entity for a link-in-bio profile (one per identity)."""

    owner_id: UUID
    username: str
    id: UUID = field(default_factory=uuid4)
    title: str | None = None
    role: str | None = None
    company: str | None = None
    bio: str | None = None
    profile_picture_url: str | None = None
    cover_image_url: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    contact_location: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    def merged(self, changes: dict[str, Any]) -> "Profile":
        """Return a copy with the partial changes applied."""
        return replace(self, **{k: v for k, v in changes.items() if k in PROFILE_MUTABLE_FIELDS})


@dataclass(frozen=True, slots=True)
class PublicProfile:
    """Read-only projection of a profile for anonymous visitors."""

    id: UUID
    username: str
    title: str | None = None
    role: str | None = None
    company: str | None = None
    bio: str | None = None
    profile_picture_url: str | None = None
    cover_image_url: str | None = None


@dataclass
class ThemeSettings:
    """Domain entity for the visual theme of a profile."""

    profile_id: UUID
    id: UUID = field(default_factory=uuid4)
    bg_type: str = BackgroundType.COLOR.value
    bg_color: str = "#210900"
    bg_image_url: str | None = None
    button_style: str = ButtonStyle.ROUNDED.value
    button_bg_color: str = "#FF6600"
    button_text_color: str = "#FFFFFF"
    button_shadow: bool = False
    font_family: str = "Space Grotesk"
    text_color: str = "#FFFFFF"

    def merged(self, changes: dict[str, Any]) -> "ThemeSettings":
        """Return a copy with the partial changes applied."""
        return replace(self, **{k: v for k, v in changes.items() if k in THEME_MUTABLE_FIELDS})


@dataclass
class Link:
    """Domain entity for one outbound link of a profile."""

    title: str
    url: str
    id: UUID = field(default_factory=uuid4)
    profile_id: UUID | None = None
    icon_class: str = "link"
    is_active: bool = True
    display_order: int = 0


def with_dense_order(links: list[Link], profile_id: UUID) -> list[Link]:
    """Rank links 0..N-1 by list position, ignoring any incoming order."""
    return [
        replace(link, profile_id=profile_id, display_order=index)
        for index, link in enumerate(links)
    ]


@dataclass(frozen=True, slots=True)
class OwnerProfile:
    """Everything the owner sees after a load.

    ``created`` is True when the profile row was inserted by the load
    that produced this value.
    """

    profile: Profile
    theme: ThemeSettings | None
    links: list[Link]
    created: bool = False


@dataclass(frozen=True, slots=True)
class PublicProfileView:
    """Everything an anonymous visitor sees."""

    profile: PublicProfile
    theme: ThemeSettings
    links: list[Link]
