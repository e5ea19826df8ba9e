"""
Skill endpoints.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies.auth import require_admin
from app.models.database_models import Skill
from app.models.schemas import (
    AuthUser,
    Envelope,
    SkillCreate,
    SkillEnvelope,
    SkillListEnvelope,
    SkillResponse,
    SkillUpdate,
)
from app.services.content import apply_changes, get_or_404

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=SkillListEnvelope)
async def list_skills(
    category: Optional[str] = Query(None, description="Case-insensitive category match"),
    db: AsyncSession = Depends(get_db),
) -> SkillListEnvelope:
    """Skills grouped by category, then display order, strongest first."""
    query = select(Skill).order_by(Skill.category.asc(), Skill.order.asc(), Skill.level.desc())
    if category:
        query = query.where(func.lower(Skill.category) == category.lower())

    result = await db.execute(query)
    return SkillListEnvelope(
        skills=[SkillResponse.model_validate(s) for s in result.scalars().all()]
    )


@router.post("", response_model=SkillEnvelope, status_code=status.HTTP_201_CREATED)
async def create_skill(
    body: SkillCreate,
    user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> SkillEnvelope:
    skill = Skill(
        name=body.name,
        category=body.category,
        level=body.resolved_level(),
        order=body.order,
    )
    db.add(skill)
    await db.flush()
    await db.refresh(skill)

    logger.info("Created skill id=%s name=%r", skill.id, skill.name)
    return SkillEnvelope(skill=SkillResponse.model_validate(skill))


@router.put("/{skill_id}", response_model=SkillEnvelope)
async def update_skill(
    skill_id: str,
    body: SkillUpdate,
    user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> SkillEnvelope:
    skill = await get_or_404(db, Skill, skill_id, "Skill")

    changes = body.model_dump(exclude_unset=True)
    proficiency = changes.pop("proficiency", None)
    if changes.get("level") is None and proficiency is not None:
        changes["level"] = proficiency
    apply_changes(skill, changes)

    await db.flush()
    await db.refresh(skill)

    logger.info("Updated skill id=%s", skill.id)
    return SkillEnvelope(skill=SkillResponse.model_validate(skill))


@router.delete("/{skill_id}", response_model=Envelope)
async def delete_skill(
    skill_id: str,
    user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> Envelope:
    skill = await get_or_404(db, Skill, skill_id, "Skill")
    await db.delete(skill)
    await db.flush()

    logger.info("Deleted skill id=%s name=%r", skill.id, skill.name)
    return Envelope(message="Skill deleted successfully")
