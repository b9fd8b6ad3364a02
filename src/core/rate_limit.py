"""Rate limiting configuration using slowapi."""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from core.config import settings
from core.exceptions import ErrorCode

# Per client address, per minute
PUBLIC_READ_LIMIT = "60/minute"
OWNER_READ_LIMIT = "30/minute"
OWNER_WRITE_LIMIT = "10/minute"

# Keyed by client address: public pages are read anonymously
limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.rate_limit_enabled,
)


async def rate_limit_exceeded_handler(request: Request, exc: Exception) -> JSONResponse:
    """Answer 429 in the standard error envelope with a Retry-After hint."""
    limit = exc.detail if isinstance(exc, RateLimitExceeded) else str(exc)
    return JSONResponse(
        status_code=429,
        content={
            "error_code": ErrorCode.RATE_LIMIT_EXCEEDED.value,
            "message": f"Too many requests, limit is {limit}",
            "details": {"limit": str(limit)},
        },
        headers={"Retry-After": "60"},
    )
