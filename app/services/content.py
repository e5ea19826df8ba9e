"""
Shared lookups used by the content routers.
"""
from __future__ import annotations

from typing import Dict, Iterable, Type, TypeVar

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base
from app.models.database_models import Comment

ModelT = TypeVar("ModelT", bound=Base)


async def get_or_404(
    db: AsyncSession,
    model: Type[ModelT],
    record_id: str,
    label: str,
) -> ModelT:
    """Fetch ``model`` by primary key or raise 404 ``"<label> not found"``."""
    record = await db.get(model, record_id)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{label} not found",
        )
    return record


async def comment_counts(
    db: AsyncSession,
    column,
    ids: Iterable[str],
) -> Dict[str, int]:
    """Batch-count comments per parent id (``Comment.project_id`` or ``Comment.post_id``)."""
    ids = list(ids)
    if not ids:
        return {}
    result = await db.execute(
        select(column, func.count(Comment.id).label("cnt"))
        .where(column.in_(ids))
        .group_by(column)
    )
    return {row[0]: row.cnt for row in result}


def apply_changes(record, changes: Dict[str, object], nullable: Iterable[str] = ()) -> None:
    """
    Copy ``changes`` (an ``exclude_unset`` dump) onto an ORM record.

    ``None`` clears a column only when it is listed in ``nullable``; for every
    other column a null in the body is ignored.
    """
    nullable = set(nullable)
    for key, value in changes.items():
        if value is None and key not in nullable:
            continue
        setattr(record, key, value)
