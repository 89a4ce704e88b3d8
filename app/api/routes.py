"""
Top-level router for the account linking service.
"""

from __future__ import annotations

from http import HTTPStatus
from fastapi import APIRouter
from fastapi.responses import RedirectResponse

from app.api.auth import discord_router, reddit_router
from app.api.verification import router as verification_router
from app.core.config import AppSettings
from app.dependencies import SettingsDependency

router = APIRouter()


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck(settings: AppSettings = SettingsDependency) -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok", "environment": settings.environment}


@router.get("/", include_in_schema=False)
async def home() -> RedirectResponse:
    return RedirectResponse(url="/verify", status_code=HTTPStatus.TEMPORARY_REDIRECT)


router.include_router(reddit_router)
router.include_router(discord_router)
router.include_router(verification_router)

__all__ = ["router"]
