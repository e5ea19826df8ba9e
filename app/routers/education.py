"""
Education endpoints. Same ordering rules as experience.
"""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies.auth import require_admin
from app.models.database_models import Education
from app.models.schemas import (
    AuthUser,
    EducationCreate,
    EducationEnvelope,
    EducationListEnvelope,
    EducationResponse,
    EducationUpdate,
    Envelope,
)
from app.services.content import apply_changes, get_or_404

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=EducationListEnvelope)
async def list_education(db: AsyncSession = Depends(get_db)) -> EducationListEnvelope:
    result = await db.execute(
        select(Education).order_by(
            Education.current.desc(),
            Education.end_date.desc().nulls_last(),
            Education.start_date.desc(),
        )
    )
    return EducationListEnvelope(
        education=[EducationResponse.model_validate(e) for e in result.scalars().all()]
    )


@router.post("", response_model=EducationEnvelope, status_code=status.HTTP_201_CREATED)
async def create_education(
    body: EducationCreate,
    user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> EducationEnvelope:
    education = Education(**body.model_dump())
    db.add(education)
    await db.flush()
    await db.refresh(education)

    logger.info("Created education id=%s %r at %r", education.id, education.degree, education.institution)
    return EducationEnvelope(education=EducationResponse.model_validate(education))


@router.put("/{education_id}", response_model=EducationEnvelope)
async def update_education(
    education_id: str,
    body: EducationUpdate,
    user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> EducationEnvelope:
    education = await get_or_404(db, Education, education_id, "Education")
    apply_changes(education, body.model_dump(exclude_unset=True), nullable=("end_date",))
    await db.flush()
    await db.refresh(education)

    logger.info("Updated education id=%s", education.id)
    return EducationEnvelope(education=EducationResponse.model_validate(education))


@router.delete("/{education_id}", response_model=Envelope)
async def delete_education(
    education_id: str,
    user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> Envelope:
    education = await get_or_404(db, Education, education_id, "Education")
    await db.delete(education)
    await db.flush()

    logger.info("Deleted education id=%s", education.id)
    return Envelope(message="Education deleted successfully")
