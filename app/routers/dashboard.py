"""
Admin dashboard statistics.
"""
import logging
from collections import Counter
from datetime import datetime, time, timedelta, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies.auth import require_admin
from app.models.database_models import (
    Certificate,
    Comment,
    Feedback,
    Post,
    Project,
    Visitor,
    utcnow,
)
from app.models.schemas import AuthUser, DailyVisits, DashboardEnvelope, DashboardStats

logger = logging.getLogger(__name__)

router = APIRouter()

RECENT_DAYS = 7


async def _count(db: AsyncSession, model, *conditions) -> int:
    query = select(func.count()).select_from(model)
    for condition in conditions:
        query = query.where(condition)
    return (await db.execute(query)).scalar_one()


async def daily_visits(db: AsyncSession, days: int = RECENT_DAYS) -> list:
    """Visit counts per UTC day for the last ``days`` days, oldest first, zero-filled."""
    today = utcnow().date()
    start = today - timedelta(days=days - 1)

    since = datetime.combine(start, time.min, tzinfo=timezone.utc)

    result = await db.execute(select(Visitor.created_at).where(Visitor.created_at >= since))
    per_day = Counter(ts.date() for ts in result.scalars().all())

    buckets = [start + timedelta(days=i) for i in range(days)]
    return [DailyVisits(date=day.isoformat(), count=per_day.get(day, 0)) for day in buckets]


@router.get("/stats", response_model=DashboardEnvelope)
async def get_stats(
    user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> DashboardEnvelope:
    stats = DashboardStats(
        total_projects=await _count(db, Project),
        featured_projects=await _count(db, Project, Project.featured.is_(True)),
        total_posts=await _count(db, Post),
        published_posts=await _count(db, Post, Post.published.is_(True)),
        total_visitors=await _count(db, Visitor),
        certificates=await _count(db, Certificate),
        comments=await _count(db, Comment),
        feedback=await _count(db, Feedback),
    )
    return DashboardEnvelope(stats=stats, recent_visitors=await daily_visits(db))
