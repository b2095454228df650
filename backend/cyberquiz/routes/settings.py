"""Endpoints for viewing and updating site-wide settings."""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cyberquiz.database import get_session
from cyberquiz.models import User
from cyberquiz.auth import require_role
from cyberquiz.schemas import SettingsRead, SettingsUpdate
from cyberquiz.crud import get_settings, save_settings

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/settings", tags=["settings"])


def _to_read(settings) -> SettingsRead:
    return SettingsRead(
        site_name=settings.site_name,
        certificate_policy=settings.certificate_policy,
        verify_base_url=settings.verify_base_url,
        public_registration_disabled=settings.public_registration_disabled,
    )


@router.get("/", response_model=SettingsRead)
async def read_settings(db: AsyncSession = Depends(get_session)):
    """Retrieve the current configuration values."""
    return _to_read(await get_settings(db))


@router.put("/", response_model=SettingsRead)
async def update_settings(
    data: SettingsUpdate,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role("admin")),
):
    """Update settings; only admins may change configuration."""
    settings = await get_settings(db)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(settings, field, value)
    updated = await save_settings(db, settings)
    logger.info("Settings updated by user %s", current_user.id)
    return _to_read(updated)
