"""
Blog post endpoints.

GET    /api/blog  list posts (newest first), ?published=true|false
POST   /api/blog  create (auth)
GET    /api/blog/{id}  post by id (admin edit view, no view count)
PUT    /api/blog/{id}  partial update (auth)
DELETE /api/blog/{id}  delete (auth)
GET    /api/blog/slug/{slug}  public read; increments the view counter
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies.auth import require_admin
from app.models.database_models import Comment, Post, utcnow
from app.models.schemas import (
    AuthUser,
    Envelope,
    PostCreate,
    PostEnvelope,
    PostListEnvelope,
    PostResponse,
    PostUpdate,
)
from app.services.content import apply_changes, comment_counts, get_or_404
from app.services.slugs import slug_exists, unique_slug

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(post: Post, comment_count: int = 0) -> PostResponse:
    response = PostResponse.model_validate(post)
    response.comment_count = comment_count
    return response


async def _with_comment_count(db: AsyncSession, post: Post) -> PostResponse:
    counts = await comment_counts(db, Comment.post_id, [post.id])
    return _to_response(post, counts.get(post.id, 0))


async def record_view(db: AsyncSession, post: Post) -> None:
    """Atomically add one view and reload the post."""
    await db.execute(
        update(Post)
        .where(Post.id == post.id)
        .values(views=Post.views + 1)
        .execution_options(synchronize_session=False)
    )
    await db.refresh(post)


async def _ensure_slug_free(db: AsyncSession, slug: str, exclude_id: Optional[str] = None) -> None:
    if await slug_exists(db, Post, slug, exclude_id=exclude_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Slug already exists")


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

@router.get("", response_model=PostListEnvelope)
async def list_posts(
    published: Optional[bool] = Query(None, description="Filter on publication state"),
    db: AsyncSession = Depends(get_db),
) -> PostListEnvelope:
    query = select(Post).order_by(Post.created_at.desc())
    if published is not None:
        query = query.where(Post.published.is_(published))

    result = await db.execute(query)
    posts = result.scalars().all()
    counts = await comment_counts(db, Comment.post_id, [p.id for p in posts])

    return PostListEnvelope(posts=[_to_response(p, counts.get(p.id, 0)) for p in posts])


@router.get("/slug/{slug}", response_model=PostEnvelope)
async def get_post_by_slug(
    slug: str,
    db: AsyncSession = Depends(get_db),
) -> PostEnvelope:
    """Public read by slug; counts one view."""
    result = await db.execute(select(Post).where(Post.slug == slug))
    post = result.scalar_one_or_none()
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")

    await record_view(db, post)

    return PostEnvelope(post=await _with_comment_count(db, post))


@router.get("/{post_id}", response_model=PostEnvelope)
async def get_post(
    post_id: str,
    db: AsyncSession = Depends(get_db),
) -> PostEnvelope:
    post = await get_or_404(db, Post, post_id, "Post")
    return PostEnvelope(post=await _with_comment_count(db, post))


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

@router.post("", response_model=PostEnvelope, status_code=status.HTTP_201_CREATED)
async def create_post(
    body: PostCreate,
    user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> PostEnvelope:
    """
    Create a post.  An explicit slug must be free (400 otherwise); without one
    the slug is derived from the title and disambiguated.
    """
    if body.slug:
        await _ensure_slug_free(db, body.slug)
        slug = body.slug
    else:
        slug = await unique_slug(db, Post, body.title)

    post = Post(
        title=body.title,
        slug=slug,
        excerpt=body.excerpt,
        content=body.content,
        cover_image=body.cover_image,
        tags=body.tags,
        published=body.published,
        views=0,
        likes=0,
    )
    db.add(post)
    await db.flush()
    await db.refresh(post)

    logger.info("Created post id=%s slug=%r by %s", post.id, post.slug, user.email)
    return PostEnvelope(post=_to_response(post), message="Post created successfully")


@router.put("/{post_id}", response_model=PostEnvelope)
async def update_post(
    post_id: str,
    body: PostUpdate,
    user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> PostEnvelope:
    """Partial update; only fields present in the body are written."""
    post = await get_or_404(db, Post, post_id, "Post")
    changes = body.model_dump(exclude_unset=True)

    new_slug = changes.pop("slug", None)
    if new_slug and new_slug != post.slug:
        await _ensure_slug_free(db, new_slug, exclude_id=post.id)
        post.slug = new_slug
    elif not new_slug and body.title and body.title != post.title:
        post.slug = await unique_slug(db, Post, body.title, exclude_id=post.id)

    apply_changes(post, changes, nullable=("cover_image",))

    post.updated_at = utcnow()
    await db.flush()
    await db.refresh(post)

    logger.info("Updated post id=%s slug=%r by %s", post.id, post.slug, user.email)
    return PostEnvelope(post=await _with_comment_count(db, post), message="Post updated successfully")


@router.delete("/{post_id}", response_model=Envelope)
async def delete_post(
    post_id: str,
    user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> Envelope:
    post = await get_or_404(db, Post, post_id, "Post")
    await db.delete(post)
    await db.flush()

    logger.info("Deleted post id=%s slug=%r by %s", post.id, post.slug, user.email)
    return Envelope(message="Post deleted successfully")
