"""Profile API routes: owner dashboard and public pages."""

from uuid import uuid4

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser, OptionalUser
from api.v1.dependencies import get_profile_service, get_public_profile_service
from api.v1.schemas.profile import (
    LinkResponse,
    LinksReplace,
    OwnerProfileResponse,
    ProfileResponse,
    ProfileUpdate,
    PublicProfileResponse,
    PublicProfileViewResponse,
    ThemeResponse,
    ThemeUpdate,
)
from core.rate_limit import (
    OWNER_READ_LIMIT,
    OWNER_WRITE_LIMIT,
    PUBLIC_READ_LIMIT,
    limiter,
)
from domain.entities.profile import Link
from domain.services.profile_service import ProfileService
from domain.services.profile_session import ProfileSession
from domain.services.public_profile_service import PublicProfileService

me_router = APIRouter(prefix="/me", tags=["profile"])
public_router = APIRouter(prefix="/profiles", tags=["public-profiles"])


def get_profile_session(
    service: ProfileService = Depends(get_profile_service),
) -> ProfileSession:
    """A fresh owner session per request."""
    return ProfileSession(service)


def _owner_response(session: ProfileSession) -> OwnerProfileResponse:
    if session.profile is None:
        return OwnerProfileResponse(authenticated=False)
    return OwnerProfileResponse(
        authenticated=True,
        created=session.created,
        profile=ProfileResponse.model_validate(session.profile),
        theme=ThemeResponse.model_validate(session.theme) if session.theme else None,
        links=[LinkResponse.model_validate(link) for link in session.links],
    )


@me_router.get(
    "/profile",
    response_model=OwnerProfileResponse,
    summary="Load the caller's profile",
)
@limiter.limit(OWNER_READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    user: OptionalUser,
    session: ProfileSession = Depends(get_profile_session),
) -> OwnerProfileResponse:
    """Load profile, theme and all links (inactive included) for the caller.

    The profile row is created on first access. Anonymous callers get an
    empty, unauthenticated state rather than an error.
    """
    await session.load(user)
    return _owner_response(session)


@me_router.patch(
    "/profile",
    response_model=OwnerProfileResponse,
    summary="Update profile fields",
    responses={
        200: {"description": "Profile updated successfully"},
        401: {"description": "Not authenticated"},
        409: {"description": "Username already taken"},
    },
)
@limiter.limit(OWNER_WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_my_profile(
    request: Request,
    body: ProfileUpdate,
    user: CurrentUser,
    session: ProfileSession = Depends(get_profile_session),
) -> OwnerProfileResponse:
    """Write only the fields present in the request body."""
    await session.load(user)
    await session.update_profile(user, body.model_dump(exclude_unset=True))
    return _owner_response(session)


@me_router.patch(
    "/theme",
    response_model=OwnerProfileResponse,
    summary="Update theme settings",
    responses={
        200: {"description": "Theme updated successfully"},
        401: {"description": "Not authenticated"},
        404: {"description": "Profile has no theme settings yet"},
    },
)
@limiter.limit(OWNER_WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_my_theme(
    request: Request,
    body: ThemeUpdate,
    user: CurrentUser,
    session: ProfileSession = Depends(get_profile_session),
) -> OwnerProfileResponse:
    """Write only the theme fields present in the request body."""
    await session.load(user)
    await session.update_theme(user, body.model_dump(exclude_unset=True))
    return _owner_response(session)


@me_router.put(
    "/links",
    response_model=OwnerProfileResponse,
    summary="Replace all links",
    responses={
        200: {"description": "Links replaced successfully"},
        401: {"description": "Not authenticated"},
    },
)
@limiter.limit(OWNER_WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def replace_my_links(
    request: Request,
    body: LinksReplace,
    user: CurrentUser,
    session: ProfileSession = Depends(get_profile_session),
) -> OwnerProfileResponse:
    """Replace the link collection; list position becomes display_order."""
    await session.load(user)
    links = [
        Link(
            id=item.id or uuid4(),
            title=item.title,
            url=item.url,
            icon_class=item.icon_class,
            is_active=item.is_active,
        )
        for item in body.links
    ]
    await session.replace_links(user, links)
    return _owner_response(session)


@public_router.get(
    "/{username}",
    response_model=PublicProfileViewResponse,
    summary="Public profile page",
    responses={
        200: {"description": "Public profile"},
        404: {"description": "Profile not found"},
    },
)
@limiter.limit(PUBLIC_READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_public_profile(
    request: Request,
    username: str,
    service: PublicProfileService = Depends(get_public_profile_service),
) -> PublicProfileViewResponse:
    """Public subset of a profile with its theme and active links only."""
    view = await service.read_public(username)
    return PublicProfileViewResponse(
        profile=PublicProfileResponse.model_validate(view.profile),
        theme=ThemeResponse.model_validate(view.theme),
        links=[LinkResponse.model_validate(link) for link in view.links],
    )
