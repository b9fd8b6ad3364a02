"""Health check endpoints."""

from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.v1.dependencies import get_table_resolver
from core.config import settings
from core.exceptions import AppException
from infrastructure.database.errors import describe
from infrastructure.database.models import profile_table
from infrastructure.database.repositories.sqlalchemy_profile_repo import PROFILE_ENTITY
from infrastructure.database.session import get_async_session
from infrastructure.database.table_resolver import TableResolver

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    environment: str
    database: str | None = None
    profile_table: str | None = None


@router.get("/health", response_model=HealthResponse, summary="Basic health check")
async def health_check() -> HealthResponse:
    """
    Basic health check for load balancers.

    Returns service status without checking dependencies. Fast and lightweight.
    """
    return HealthResponse(
        status="healthy",
        version="1.0.0",
        timestamp=datetime.utcnow().isoformat(),
        environment=settings.app_env,
    )


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Detailed health check",
)
async def detailed_health_check(
    db: AsyncSession = Depends(get_async_session),
    resolver: TableResolver = Depends(get_table_resolver),
) -> HealthResponse:
    """
    Detailed health check including the profile table resolution.

    Probes the profile table candidates through the shared resolver, so a
    healthy response also tells which physical table is in use.
    """

    async def probe(name: str) -> str:
        table = profile_table(name)
        try:
            await db.execute(select(table.c.id).limit(1))
        except SQLAlchemyError:
            await db.rollback()
            raise
        return name

    db_status = "healthy"
    table_name: str | None = None
    try:
        table_name = await resolver.resolve(PROFILE_ENTITY, probe)
    except SQLAlchemyError as e:
        db_status = f"unhealthy: {describe(e)}"
    except AppException as e:
        db_status = f"unhealthy: {e.message}"

    overall_status = "healthy" if db_status == "healthy" else "degraded"

    return HealthResponse(
        status=overall_status,
        version="1.0.0",
        timestamp=datetime.utcnow().isoformat(),
        environment=settings.app_env,
        database=db_status,
        profile_table=table_name,
    )
