"""Pydantic schemas for Profile, Theme and Link API."""

from typing import Literal
from uuid import UUID

from pydantic import (
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"
USERNAME_PATTERN = r"^[a-zA-Z0-9_-]+$"
ICON_CLASS_PATTERN = r"^[a-z-]+$"

_HTTP_URL = TypeAdapter(AnyHttpUrl)


def _strip(value: str | None) -> str | None:
    return value.strip() if isinstance(value, str) else value


class ProfileUpdate(BaseModel):
    """Schema for a partial profile update. Only sent fields are written."""

    username: str | None = Field(None, min_length=3, max_length=30, pattern=USERNAME_PATTERN)
    title: str | None = Field(None, max_length=100)
    role: str | None = Field(None, max_length=100)
    company: str | None = Field(None, max_length=100)
    bio: str | None = Field(None, max_length=500)
    profile_picture_url: str | None = Field(None, max_length=500)
    cover_image_url: str | None = Field(None, max_length=500)
    contact_email: EmailStr | None = None
    contact_phone: str | None = Field(None, max_length=20)
    contact_location: str | None = Field(None, max_length=100)

    @field_validator(
        "username",
        "title",
        "role",
        "company",
        "bio",
        "contact_phone",
        "contact_location",
        mode="before",
    )
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return _strip(v)

    @field_validator("contact_email", mode="before")
    @classmethod
    def empty_email_is_null(cls, v: str | None) -> str | None:
        v = _strip(v)
        return v or None

    @field_validator("username")
    @classmethod
    def username_not_null(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("Username cannot be cleared")
        return v


class ThemeUpdate(BaseModel):
    """Schema for a partial theme update. Only sent fields are written."""

    bg_type: Literal["color", "image"] | None = None
    bg_color: str | None = Field(None, pattern=HEX_COLOR_PATTERN)
    bg_image_url: str | None = Field(None, max_length=500)
    button_style: Literal["rectangular", "rounded", "pill"] | None = None
    button_bg_color: str | None = Field(None, pattern=HEX_COLOR_PATTERN)
    button_text_color: str | None = Field(None, pattern=HEX_COLOR_PATTERN)
    button_shadow: bool | None = None
    font_family: str | None = Field(None, min_length=1, max_length=100)
    text_color: str | None = Field(None, pattern=HEX_COLOR_PATTERN)

    @model_validator(mode="after")
    def required_fields_not_null(self) -> "ThemeUpdate":
        for name in self.model_fields_set:
            if name != "bg_image_url" and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class LinkIn(BaseModel):
    """One link of a replace-all request.

    ``display_order`` is accepted for client convenience but ignored; the
    position in the list decides the order.
    """

    id: UUID | None = None
    title: str = Field(..., min_length=1, max_length=100)
    url: str = Field(..., min_length=1, max_length=2048)
    icon_class: str = Field("link", pattern=ICON_CLASS_PATTERN, max_length=50)
    is_active: bool = True
    display_order: int | None = None

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return _strip(v)  # type: ignore[return-value]

    @field_validator("url")
    @classmethod
    def well_formed_url(cls, v: str) -> str:
        v = v.strip()
        try:
            _HTTP_URL.validate_python(v)
        except ValidationError:
            raise ValueError("Invalid URL format") from None
        return v


class LinksReplace(BaseModel):
    """Schema for replacing the full ordered link collection."""

    links: list[LinkIn] = Field(default_factory=list, max_length=100)

    @model_validator(mode="after")
    def unique_ids(self) -> "LinksReplace":
        ids = [link.id for link in self.links if link.id is not None]
        if len(ids) != len(set(ids)):
            raise ValueError("Link ids must be unique")
        return self


class ProfileResponse(BaseModel):
    """Owner view of a profile, contact fields included."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: UUID
    username: str
    title: str | None = None
    role: str | None = None
    company: str | None = None
    bio: str | None = None
    profile_picture_url: str | None = None
    cover_image_url: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    contact_location: str | None = None


class PublicProfileResponse(BaseModel):
    """Public subset of a profile."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    title: str | None = None
    role: str | None = None
    company: str | None = None
    bio: str | None = None
    profile_picture_url: str | None = None
    cover_image_url: str | None = None


class ThemeResponse(BaseModel):
    """Schema for theme settings."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "bg_type": "color",
                "bg_color": "#210900",
                "bg_image_url": None,
                "button_style": "rounded",
                "button_bg_color": "#FF6600",
                "button_text_color": "#FFFFFF",
                "button_shadow": False,
                "font_family": "Space Grotesk",
                "text_color": "#FFFFFF",
            }
        },
    )

    bg_type: str
    bg_color: str
    bg_image_url: str | None = None
    button_style: str
    button_bg_color: str
    button_text_color: str
    button_shadow: bool
    font_family: str
    text_color: str


class LinkResponse(BaseModel):
    """Schema for a stored link."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    url: str
    icon_class: str
    is_active: bool
    display_order: int


class OwnerProfileResponse(BaseModel):
    """Owner dashboard state. Empty when the caller is anonymous."""

    authenticated: bool
    created: bool = False
    profile: ProfileResponse | None = None
    theme: ThemeResponse | None = None
    links: list[LinkResponse] = Field(default_factory=list)


class PublicProfileViewResponse(BaseModel):
    """Everything a visitor needs to render a public page."""

    profile: PublicProfileResponse
    theme: ThemeResponse
    links: list[LinkResponse]
