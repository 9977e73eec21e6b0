"""Versioned API router."""

from fastapi import APIRouter

from . import categories, health, housekeeping, loyalty, markup, schedules

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(categories.router, prefix="/categories", tags=["categories"])
router.include_router(markup.router, prefix="/markup-settings", tags=["markup"])
router.include_router(schedules.router, prefix="/schedules", tags=["schedules"])
router.include_router(
    housekeeping.router, prefix="/housekeeping-services", tags=["housekeeping"]
)
router.include_router(loyalty.router, prefix="/loyalty", tags=["loyalty"])

__all__ = ["router"]
