"""SQLAlchemy ORM models."""

from datetime import datetime
from functools import lru_cache
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class ProfileModel(Base):
    """Link-in-bio profile, one row per authenticated identity.

    The physical table may carry another name on older deployments, so
    repositories go through ``profile_table()`` instead of this class.
    """

    __tablename__ = "profiles"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    owner_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, unique=True)
    username: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    title: Mapped[str | None] = mapped_column(String(100))
    role: Mapped[str | None] = mapped_column(String(100))
    company: Mapped[str | None] = mapped_column(String(100))
    bio: Mapped[str | None] = mapped_column(Text)
    profile_picture_url: Mapped[str | None] = mapped_column(String(500))
    cover_image_url: Mapped[str | None] = mapped_column(String(500))
    contact_email: Mapped[str | None] = mapped_column(String(255))
    contact_phone: Mapped[str | None] = mapped_column(String(20))
    contact_location: Mapped[str | None] = mapped_column(String(100))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )


class ThemeSettingsModel(Base):
    """Visual theme of a profile (one row per profile).

    No ForeignKey is declared here because the referenced profile table
    name is resolved at runtime; the constraint lives in the migrations.
    """

    __tablename__ = "theme_settings"
    __table_args__ = (
        CheckConstraint("bg_type IN ('color', 'image')", name="ck_theme_settings_bg_type"),
        CheckConstraint(
            "button_style IN ('rectangular', 'rounded', 'pill')",
            name="ck_theme_settings_button_style",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    profile_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, unique=True)
    bg_type: Mapped[str] = mapped_column(String(10), nullable=False, default="color")
    bg_color: Mapped[str] = mapped_column(String(7), nullable=False, default="#210900")
    bg_image_url: Mapped[str | None] = mapped_column(String(500))
    button_style: Mapped[str] = mapped_column(String(20), nullable=False, default="rounded")
    button_bg_color: Mapped[str] = mapped_column(String(7), nullable=False, default="#FF6600")
    button_text_color: Mapped[str] = mapped_column(String(7), nullable=False, default="#FFFFFF")
    button_shadow: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    font_family: Mapped[str] = mapped_column(String(100), nullable=False, default="Space Grotesk")
    text_color: Mapped[str] = mapped_column(String(7), nullable=False, default="#FFFFFF")


class LinkModel(Base):
    """Outbound link of a profile."""

    __tablename__ = "links"
    __table_args__ = (
        Index("ix_links_profile_order", "profile_id", "display_order"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    profile_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    url: Mapped[str] = mapped_column(String(2048), nullable=False)
    icon_class: Mapped[str] = mapped_column(String(50), nullable=False, default="link")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


def profile_table(name: str) -> Table:
    """Return the profile ``Table`` under the given physical name."""
    if name == ProfileModel.__tablename__:
        return ProfileModel.__table__  # type: ignore[return-value]
    return _renamed_profile_table(name)


@lru_cache
def _renamed_profile_table(name: str) -> Table:
    # Separate MetaData per alias so constraint names never collide
    return ProfileModel.__table__.to_metadata(MetaData(), name=name)  # type: ignore[attr-defined]
