"""
Like counters for projects and posts.

There is no per-visitor record: the counter is adjusted by one in a single
UPDATE and never drops below zero.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import case, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.database_models import Post, Project
from app.models.schemas import LikeAction, LikeRequest, LikeResponse, LikeTargetSchema

logger = logging.getLogger(__name__)

router = APIRouter()

_TARGETS = {
    LikeTargetSchema.PROJECT: (Project, "Project"),
    LikeTargetSchema.POST: (Post, "Post"),
}


@router.post("", response_model=LikeResponse)
async def toggle_like(
    body: LikeRequest,
    db: AsyncSession = Depends(get_db),
) -> LikeResponse:
    model, label = _TARGETS[body.type]
    delta = -1 if body.action == LikeAction.UNLIKE else 1

    result = await db.execute(
        update(model)
        .where(model.id == body.id)
        .values(likes=case((model.likes + delta < 0, 0), else_=model.likes + delta))
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} not found")

    likes = (await db.execute(select(model.likes).where(model.id == body.id))).scalar_one()

    logger.info("%s %s id=%s -> %d likes", body.action.value, body.type.value, body.id, likes)
    return LikeResponse(likes=likes)
