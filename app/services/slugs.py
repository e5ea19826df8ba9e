"""
Slug resolution for projects and posts.

Uniqueness is enforced by lookup-then-disambiguate: derive the slug from the
title, look for another record that already owns it, and append the current
millisecond timestamp on collision.  The unique index on ``slug`` is the
backstop.
"""
from __future__ import annotations

import logging
from typing import Optional, Type, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.database_models import Post, Project
from app.utils.helpers import disambiguate_slug, slugify

logger = logging.getLogger(__name__)

SluggedModel = Union[Type[Project], Type[Post]]


async def slug_exists(
    db: AsyncSession,
    model: SluggedModel,
    slug: str,
    exclude_id: Optional[str] = None,
) -> bool:
    """True when a record other than ``exclude_id`` already uses ``slug``."""
    query = select(model.id).where(model.slug == slug)
    if exclude_id is not None:
        query = query.where(model.id != exclude_id)
    result = await db.execute(query.limit(1))
    return result.first() is not None


async def unique_slug(
    db: AsyncSession,
    model: SluggedModel,
    title: str,
    exclude_id: Optional[str] = None,
) -> str:
    """Slug for ``title`` that no other record in ``model``'s collection owns."""
    slug = slugify(title)
    if await slug_exists(db, model, slug, exclude_id=exclude_id):
        taken = slug
        slug = disambiguate_slug(slug)
        logger.info("Slug %r already taken in %s; using %r", taken, model.__tablename__, slug)
    return slug
