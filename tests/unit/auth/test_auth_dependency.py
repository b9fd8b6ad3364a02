"""Unit tests for authentication dependencies."""

from uuid import uuid4

import pytest
import structlog
from fastapi.security import HTTPAuthorizationCredentials

from api.dependencies.auth import get_current_user, get_optional_user
from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser


@pytest.fixture
def provider() -> JWTAuthProvider:
    return JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=30)


@pytest.fixture
def owner() -> TokenUser:
    return TokenUser(id=uuid4(), email="owner@example.com")


def _bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


@pytest.fixture(autouse=True)
def _reset_log_context():
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


class TestGetCurrentUser:
    @pytest.mark.asyncio
    async def test_returns_identity_from_token(self, provider: JWTAuthProvider, owner: TokenUser):
        result = await get_current_user(_bearer(provider.create_token(owner)), provider)

        assert result.id == owner.id
        assert result.email == owner.email
        assert result.role == "authenticated"

    @pytest.mark.asyncio
    async def test_binds_owner_to_log_context(self, provider: JWTAuthProvider, owner: TokenUser):
        await get_current_user(_bearer(provider.create_token(owner)), provider)

        assert structlog.contextvars.get_contextvars()["owner_id"] == str(owner.id)

    @pytest.mark.asyncio
    async def test_token_without_email(self, provider: JWTAuthProvider):
        anonymous_email = TokenUser(id=uuid4())

        result = await get_current_user(
            _bearer(provider.create_token(anonymous_email)), provider
        )

        assert result.id == anonymous_email.id
        assert result.email is None

    @pytest.mark.asyncio
    async def test_missing_header(self, provider: JWTAuthProvider):
        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(None, provider)

        assert exc_info.value.error_code == ErrorCode.UNAUTHORIZED
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_malformed_token(self, provider: JWTAuthProvider):
        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(_bearer("invalid.jwt.token"), provider)

        assert exc_info.value.error_code == ErrorCode.INVALID_TOKEN

    @pytest.mark.asyncio
    async def test_token_signed_with_another_secret(self, owner: TokenUser):
        foreign = JWTAuthProvider(secret_key="other-secret", algorithm="HS256", expire_minutes=30)
        provider = JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=30)

        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(_bearer(foreign.create_token(owner)), provider)

        assert exc_info.value.error_code == ErrorCode.INVALID_TOKEN

    @pytest.mark.asyncio
    async def test_expired_token(self, owner: TokenUser):
        expired = JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=-1)
        provider = JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=30)

        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(_bearer(expired.create_token(owner)), provider)

        assert exc_info.value.error_code == ErrorCode.INVALID_TOKEN


class TestGetOptionalUser:
    @pytest.mark.asyncio
    async def test_returns_identity_from_token(self, provider: JWTAuthProvider, owner: TokenUser):
        result = await get_optional_user(_bearer(provider.create_token(owner)), provider)

        assert result == TokenUser(id=owner.id, email=owner.email, role="authenticated")

    @pytest.mark.asyncio
    async def test_anonymous_without_header(self, provider: JWTAuthProvider):
        assert await get_optional_user(None, provider) is None

    @pytest.mark.asyncio
    async def test_anonymous_with_bad_token(self, provider: JWTAuthProvider):
        assert await get_optional_user(_bearer("invalid.jwt.token"), provider) is None
        assert "owner_id" not in structlog.contextvars.get_contextvars()
