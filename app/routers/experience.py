"""
Work experience endpoints.

Listing order: current positions first, then most recent end date, then most
recent start date.
"""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies.auth import require_admin
from app.models.database_models import Experience
from app.models.schemas import (
    AuthUser,
    Envelope,
    ExperienceCreate,
    ExperienceEnvelope,
    ExperienceListEnvelope,
    ExperienceResponse,
    ExperienceUpdate,
)
from app.services.content import apply_changes, get_or_404

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=ExperienceListEnvelope)
async def list_experience(db: AsyncSession = Depends(get_db)) -> ExperienceListEnvelope:
    result = await db.execute(
        select(Experience).order_by(
            Experience.current.desc(),
            Experience.end_date.desc().nulls_last(),
            Experience.start_date.desc(),
        )
    )
    return ExperienceListEnvelope(
        experience=[ExperienceResponse.model_validate(e) for e in result.scalars().all()]
    )


@router.post("", response_model=ExperienceEnvelope, status_code=status.HTTP_201_CREATED)
async def create_experience(
    body: ExperienceCreate,
    user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> ExperienceEnvelope:
    experience = Experience(**body.model_dump())
    db.add(experience)
    await db.flush()
    await db.refresh(experience)

    logger.info("Created experience id=%s %r at %r", experience.id, experience.title, experience.company)
    return ExperienceEnvelope(experience=ExperienceResponse.model_validate(experience))


@router.put("/{experience_id}", response_model=ExperienceEnvelope)
async def update_experience(
    experience_id: str,
    body: ExperienceUpdate,
    user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> ExperienceEnvelope:
    experience = await get_or_404(db, Experience, experience_id, "Experience")

    # endDate: null clears the end date
    apply_changes(experience, body.model_dump(exclude_unset=True), nullable=("end_date",))
    await db.flush()
    await db.refresh(experience)

    logger.info("Updated experience id=%s", experience.id)
    return ExperienceEnvelope(experience=ExperienceResponse.model_validate(experience))


@router.delete("/{experience_id}", response_model=Envelope)
async def delete_experience(
    experience_id: str,
    user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> Envelope:
    experience = await get_or_404(db, Experience, experience_id, "Experience")
    await db.delete(experience)
    await db.flush()

    logger.info("Deleted experience id=%s", experience.id)
    return Envelope(message="Experience deleted successfully")
