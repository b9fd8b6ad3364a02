"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.profiles import me_router, public_router

router = APIRouter()
router.include_router(me_router)
router.include_router(public_router)
