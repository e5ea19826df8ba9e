"""
Page-visit tracking.
"""
import logging

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies.auth import require_admin
from app.models.database_models import Visitor
from app.models.schemas import (
    AuthUser,
    VisitCreate,
    VisitorEnvelope,
    VisitorListEnvelope,
    VisitorResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def client_ip(request: Request) -> str:
    """First address in X-Forwarded-For, else the socket peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else ""


@router.post("", response_model=VisitorEnvelope, status_code=status.HTTP_201_CREATED)
async def record_visit(
    body: VisitCreate,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> VisitorEnvelope:
    visitor = Visitor(
        path=body.path,
        referrer=body.referrer or None,
        user_agent=(request.headers.get("user-agent") or "")[:512] or None,
        ip_address=client_ip(request) or None,
    )
    db.add(visitor)
    await db.flush()
    await db.refresh(visitor)

    logger.debug("Visit %s from %s", visitor.path, visitor.ip_address)
    return VisitorEnvelope(visitor=VisitorResponse.model_validate(visitor))


@router.get("", response_model=VisitorListEnvelope)
async def list_visitors(
    limit: int = Query(100, ge=1, le=1000),
    user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> VisitorListEnvelope:
    result = await db.execute(
        select(Visitor).order_by(Visitor.created_at.desc()).limit(limit)
    )
    return VisitorListEnvelope(
        visitors=[VisitorResponse.model_validate(v) for v in result.scalars().all()]
    )
