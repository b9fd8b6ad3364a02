"""Authentication dependencies for FastAPI.

Identity is resolved from the bearer token on every request and handed to
the route explicitly; nothing downstream reads it from ambient state.
"""

from typing import Annotated

import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import IAuthProvider, TokenUser

logger = structlog.get_logger()

# Security scheme for OpenAPI docs
bearer_scheme = HTTPBearer(auto_error=False)

Credentials = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]

_auth_provider: IAuthProvider | None = None


def get_auth_provider() -> IAuthProvider:
    """Get or create the process-wide auth provider."""
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = JWTAuthProvider()
    return _auth_provider


async def _identify(
    credentials: HTTPAuthorizationCredentials | None, auth_provider: IAuthProvider
) -> TokenUser | None:
    if credentials is None:
        return None

    user = await auth_provider.validate_token(credentials.credentials)
    if user is None:
        logger.info("token_rejected", scheme=credentials.scheme)
        return None

    structlog.contextvars.bind_contextvars(owner_id=str(user.id))
    return user


async def get_current_user(
    credentials: Credentials,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> TokenUser:
    """
    Require an authenticated caller.

    Raises:
        AuthenticationError: UNAUTHORIZED without a token, INVALID_TOKEN when
            the token does not verify or carries no usable subject
    """
    if credentials is None:
        raise AuthenticationError(
            message="Authorization header required",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    user = await _identify(credentials, auth_provider)
    if user is None:
        raise AuthenticationError(
            message="Invalid or expired token",
            error_code=ErrorCode.INVALID_TOKEN,
        )
    return user


async def get_optional_user(
    credentials: Credentials,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> TokenUser | None:
    """Identify the caller when possible; anonymous otherwise, never an error."""
    return await _identify(credentials, auth_provider)


CurrentUser = Annotated[TokenUser, Depends(get_current_user)]
OptionalUser = Annotated[TokenUser | None, Depends(get_optional_user)]
