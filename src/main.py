"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.routes.health import router as health_router
from api.v1 import router as v1_router
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import (
    OWNER_READ_LIMIT,
    OWNER_WRITE_LIMIT,
    PUBLIC_READ_LIMIT,
    limiter,
    rate_limit_exceeded_handler,
)
from infrastructure.database.session import engine

logger = structlog.get_logger()

setup_logging()

API_DESCRIPTION = f"""\
## Link-in-bio Profiles

Bioboard stores one public profile per user: identity fields, a visual
theme and an ordered list of links that can be switched on and off.

### Owner dashboard (`/api/v1/me/*`)
- The profile is created on first access, named after the email's local part
- Profile and theme updates are partial: only sent fields change
- Links are replaced as a whole; list position becomes the display order

### Public pages (`/api/v1/profiles/{{username}}`)
- Anonymous, read-only, contact fields and inactive links left out

### Authentication
Owner writes require a Supabase JWT:
```
Authorization: Bearer <your_token>
```

### Rate Limits (per client address)
- Public pages: {PUBLIC_READ_LIMIT}
- Owner reads: {OWNER_READ_LIMIT}
- Owner writes: {OWNER_WRITE_LIMIT}
"""

OPENAPI_TAGS = [
    {"name": "health", "description": "Health check endpoints"},
    {"name": "profile", "description": "Owner profile, theme and link management"},
    {"name": "public-profiles", "description": "Read-only public profile pages"},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log startup and release pooled connections on shutdown."""
    logger.info(
        "app_started",
        environment=settings.app_env,
        profile_tables=settings.profile_table_candidates_list,
    )
    yield
    await engine.dispose()
    logger.info("app_stopped")


def _add_middleware(app: FastAPI) -> None:
    # Starlette runs middleware in reverse order of registration
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "PATCH", "PUT", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=API_DESCRIPTION,
        version="1.0.0",
        debug=settings.debug,
        contact={"name": "Bioboard Support"},
        license_info={"name": "MIT"},
        openapi_tags=OPENAPI_TAGS,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    _add_middleware(app)
    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
