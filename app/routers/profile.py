"""
Site owner profile.

There is one profile row in practice; GET creates it from defaults on first
read so the public pages always have something to render.
"""
import copy
import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies.auth import require_admin
from app.models.database_models import Profile, utcnow
from app.models.schemas import AuthUser, ProfileEnvelope, ProfileResponse, ProfileUpdate
from app.seed_data import DEFAULT_PROFILE

logger = logging.getLogger(__name__)

router = APIRouter()


async def get_or_create_profile(db: AsyncSession) -> Profile:
    """Return the first profile, creating the default one when the table is empty."""
    result = await db.execute(select(Profile).order_by(Profile.created_at.asc()).limit(1))
    profile = result.scalar_one_or_none()
    if profile is not None:
        return profile

    profile = Profile(**copy.deepcopy(DEFAULT_PROFILE))
    db.add(profile)
    await db.flush()
    await db.refresh(profile)
    logger.info("Created default profile id=%s", profile.id)
    return profile


@router.get("", response_model=ProfileEnvelope)
async def get_profile(db: AsyncSession = Depends(get_db)) -> ProfileEnvelope:
    profile = await get_or_create_profile(db)
    return ProfileEnvelope(profile=ProfileResponse.model_validate(profile))


@router.put("", response_model=ProfileEnvelope)
async def update_profile(
    body: ProfileUpdate,
    user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> ProfileEnvelope:
    """
    Merge the provided fields into the profile.

    Empty values are ignored, except ``phone`` which may be cleared.
    """
    profile = await get_or_create_profile(db)

    for key, value in body.model_dump(exclude_unset=True).items():
        if key == "phone" or value:
            setattr(profile, key, value)

    profile.updated_at = utcnow()
    await db.flush()
    await db.refresh(profile)

    logger.info("Updated profile id=%s by %s", profile.id, user.email)
    return ProfileEnvelope(
        profile=ProfileResponse.model_validate(profile),
        message="Profile updated successfully",
    )
