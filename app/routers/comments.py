"""
Visitor comments on projects and blog posts.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.database import get_db
from app.dependencies.auth import require_admin
from app.models.database_models import Comment, Post, Project
from app.models.schemas import (
    AuthUser,
    CommentCreate,
    CommentEnvelope,
    CommentListEnvelope,
    CommentResponse,
    ContentSummary,
    Envelope,
)
from app.services.content import get_or_404

logger = logging.getLogger(__name__)

router = APIRouter()


def to_comment_response(comment: Comment) -> CommentResponse:
    """Build the response from a comment whose ``project``/``post`` are already loaded."""
    return CommentResponse(
        id=comment.id,
        content=comment.content,
        author=comment.author,
        project_id=comment.project_id,
        post_id=comment.post_id,
        created_at=comment.created_at,
        project=(
            ContentSummary(title=comment.project.title, slug=comment.project.slug)
            if comment.project is not None else None
        ),
        post=(
            ContentSummary(title=comment.post.title, slug=comment.post.slug)
            if comment.post is not None else None
        ),
    )


async def list_comments_for(
    db: AsyncSession,
    project_id: Optional[str] = None,
    post_id: Optional[str] = None,
) -> list:
    """Comments newest first, optionally narrowed to one project and/or post."""
    query = (
        select(Comment)
        .options(selectinload(Comment.project), selectinload(Comment.post))
        .order_by(Comment.created_at.desc())
    )
    if project_id:
        query = query.where(Comment.project_id == project_id)
    if post_id:
        query = query.where(Comment.post_id == post_id)

    result = await db.execute(query)
    return list(result.scalars().all())


@router.get("", response_model=CommentListEnvelope)
async def list_comments(
    project_id: Optional[str] = Query(None, alias="projectId"),
    post_id: Optional[str] = Query(None, alias="postId"),
    db: AsyncSession = Depends(get_db),
) -> CommentListEnvelope:
    """No filter returns every comment (admin moderation view)."""
    comments = await list_comments_for(db, project_id=project_id, post_id=post_id)
    return CommentListEnvelope(comments=[to_comment_response(c) for c in comments])


@router.post("", response_model=CommentEnvelope, status_code=status.HTTP_201_CREATED)
async def create_comment(
    body: CommentCreate,
    db: AsyncSession = Depends(get_db),
) -> CommentEnvelope:
    if not body.project_id and not body.post_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Project ID or Post ID is required",
        )

    project = await get_or_404(db, Project, body.project_id, "Project") if body.project_id else None
    post = await get_or_404(db, Post, body.post_id, "Post") if body.post_id else None

    comment = Comment(
        content=body.content,
        author=(body.author or "").strip() or "Anonymous",
        project_id=project.id if project else None,
        post_id=post.id if post else None,
    )
    db.add(comment)
    await db.flush()
    await db.refresh(comment)

    logger.info(
        "Comment id=%s by %r on project=%s post=%s",
        comment.id, comment.author, comment.project_id, comment.post_id,
    )

    response = CommentResponse(
        id=comment.id,
        content=comment.content,
        author=comment.author,
        project_id=comment.project_id,
        post_id=comment.post_id,
        created_at=comment.created_at,
        project=ContentSummary(title=project.title, slug=project.slug) if project else None,
        post=ContentSummary(title=post.title, slug=post.slug) if post else None,
    )
    return CommentEnvelope(comment=response, message="Comment added successfully")


@router.delete("/{comment_id}", response_model=Envelope)
async def delete_comment(
    comment_id: str,
    user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> Envelope:
    comment = await get_or_404(db, Comment, comment_id, "Comment")
    await db.delete(comment)
    await db.flush()

    logger.info("Deleted comment id=%s by %s", comment.id, user.email)
    return Envelope(message="Comment deleted successfully")
