"""
Site feedback: public submission, admin review.
"""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies.auth import require_admin
from app.models.database_models import Feedback
from app.models.schemas import (
    AuthUser,
    Envelope,
    FeedbackCreate,
    FeedbackEnvelope,
    FeedbackListEnvelope,
    FeedbackResponse,
)
from app.services.content import get_or_404

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=FeedbackEnvelope, status_code=status.HTTP_201_CREATED)
async def submit_feedback(
    body: FeedbackCreate,
    db: AsyncSession = Depends(get_db),
) -> FeedbackEnvelope:
    feedback = Feedback(message=body.message, email=body.email or None, rating=body.rating)
    db.add(feedback)
    await db.flush()
    await db.refresh(feedback)

    logger.info("Feedback id=%s rating=%d", feedback.id, feedback.rating)
    return FeedbackEnvelope(
        feedback=FeedbackResponse.model_validate(feedback),
        message="Feedback submitted successfully",
    )


@router.get("", response_model=FeedbackListEnvelope)
async def list_feedback(
    db: AsyncSession = Depends(get_db),
) -> FeedbackListEnvelope:
    result = await db.execute(select(Feedback).order_by(Feedback.created_at.desc()))
    return FeedbackListEnvelope(
        feedback=[FeedbackResponse.model_validate(f) for f in result.scalars().all()]
    )


@router.delete("/{feedback_id}", response_model=Envelope)
async def delete_feedback(
    feedback_id: str,
    user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> Envelope:
    feedback = await get_or_404(db, Feedback, feedback_id, "Feedback")
    await db.delete(feedback)
    await db.flush()

    logger.info("Deleted feedback id=%s by %s", feedback.id, user.email)
    return Envelope(message="Feedback deleted successfully")
