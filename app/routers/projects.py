"""
Portfolio project endpoints.

Route summary
-------------
GET    /api/projects                list (featured first), ?featured=true&limit=N
POST   /api/projects                create (auth)
GET    /api/projects/{id}           detail by id
PUT    /api/projects/{id}           update (auth)
DELETE /api/projects/{id}           delete (auth, cascades comments)
GET    /api/projects/slug/{slug}    detail by slug
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies.auth import require_admin
from app.models.database_models import Comment, Project, utcnow
from app.models.schemas import (
    AuthUser,
    Envelope,
    ProjectCreate,
    ProjectEnvelope,
    ProjectListEnvelope,
    ProjectResponse,
    ProjectUpdate,
)
from app.services.content import comment_counts, get_or_404
from app.services.slugs import unique_slug

logger = logging.getLogger(__name__)

router = APIRouter()

# Optional fields written on update only when present in the body
_OPTIONAL_UPDATE_FIELDS = ("cover_image", "github_url", "demo_url", "featured", "tags", "order")


def _to_response(project: Project, comment_count: int = 0) -> ProjectResponse:
    response = ProjectResponse.model_validate(project)
    response.comment_count = comment_count
    return response


async def _with_comment_count(db: AsyncSession, project: Project) -> ProjectResponse:
    counts = await comment_counts(db, Comment.project_id, [project.id])
    return _to_response(project, counts.get(project.id, 0))


# ═══════════════════════════════════════════════════════════════════════════════
# PUBLIC READS
# ═══════════════════════════════════════════════════════════════════════════════

@router.get("", response_model=ProjectListEnvelope)
async def list_projects(
    featured: Optional[bool] = Query(None, description="Only featured projects when true"),
    limit: Optional[int] = Query(None, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
) -> ProjectListEnvelope:
    """List projects: featured first, then by display order, newest first."""
    query = select(Project).order_by(
        Project.featured.desc(),
        Project.order.asc(),
        Project.created_at.desc(),
    )
    if featured:
        query = query.where(Project.featured.is_(True))
    if limit:
        query = query.limit(limit)

    result = await db.execute(query)
    projects = result.scalars().all()

    # Batch-fetch comment counts
    counts = await comment_counts(db, Comment.project_id, [p.id for p in projects])

    return ProjectListEnvelope(
        projects=[_to_response(p, counts.get(p.id, 0)) for p in projects]
    )


@router.get("/slug/{slug}", response_model=ProjectEnvelope)
async def get_project_by_slug(
    slug: str,
    db: AsyncSession = Depends(get_db),
) -> ProjectEnvelope:
    result = await db.execute(select(Project).where(Project.slug == slug))
    project = result.scalar_one_or_none()
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")

    return ProjectEnvelope(project=await _with_comment_count(db, project))


@router.get("/{project_id}", response_model=ProjectEnvelope)
async def get_project(
    project_id: str,
    db: AsyncSession = Depends(get_db),
) -> ProjectEnvelope:
    project = await get_or_404(db, Project, project_id, "Project")
    return ProjectEnvelope(project=await _with_comment_count(db, project))


# ═══════════════════════════════════════════════════════════════════════════════
# ADMIN WRITES
# ═══════════════════════════════════════════════════════════════════════════════

@router.post("", response_model=ProjectEnvelope, status_code=status.HTTP_201_CREATED)
async def create_project(
    body: ProjectCreate,
    user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> ProjectEnvelope:
    """Create a project; the slug is derived from the title and made unique."""
    slug = await unique_slug(db, Project, body.title)

    project = Project(
        title=body.title,
        slug=slug,
        description=body.description,
        content=body.content,
        cover_image=body.cover_image,
        github_url=body.github_url,
        demo_url=body.demo_url,
        featured=body.featured,
        tags=body.tags,
        order=body.order,
        likes=0,
    )
    db.add(project)
    await db.flush()
    await db.refresh(project)

    logger.info("Created project id=%s slug=%r by %s", project.id, project.slug, user.email)

    return ProjectEnvelope(project=_to_response(project), message="Project created successfully")


@router.put("/{project_id}", response_model=ProjectEnvelope)
async def update_project(
    project_id: str,
    body: ProjectUpdate,
    user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> ProjectEnvelope:
    """
    Update a project.

    Title, description and content are always written.  When the title
    changes the slug is re-derived and disambiguated against the *other*
    projects.  Optional fields are written only when present in the body.
    """
    project = await get_or_404(db, Project, project_id, "Project")

    if body.title != project.title:
        project.slug = await unique_slug(db, Project, body.title, exclude_id=project.id)

    project.title = body.title
    project.description = body.description
    project.content = body.content

    for field in _OPTIONAL_UPDATE_FIELDS:
        if field in body.model_fields_set:
            setattr(project, field, getattr(body, field))

    project.updated_at = utcnow()
    await db.flush()
    await db.refresh(project)

    logger.info("Updated project id=%s slug=%r by %s", project.id, project.slug, user.email)

    return ProjectEnvelope(
        project=await _with_comment_count(db, project),
        message="Project updated successfully",
    )


@router.delete("/{project_id}", response_model=Envelope)
async def delete_project(
    project_id: str,
    user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> Envelope:
    project = await get_or_404(db, Project, project_id, "Project")

    await db.delete(project)
    await db.flush()
    logger.info("Deleted project id=%s slug=%r by %s", project.id, project.slug, user.email)

    return Envelope(message="Project deleted successfully")
