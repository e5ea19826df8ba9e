"""
Server-rendered public site.

Pages reuse the API handlers and query helpers so the HTML and JSON views
always agree.
"""
import logging
from itertools import groupby
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies.auth import get_optional_user
from app.models.database_models import Post
from app.models.schemas import AuthUser, ContactRequest, PostResponse
from app.routers.blog import list_posts, record_view
from app.routers.certificates import list_certificates
from app.routers.comments import list_comments_for, to_comment_response
from app.routers.education import list_education
from app.routers.experience import list_experience
from app.routers.profile import get_or_create_profile
from app.routers.projects import get_project_by_slug, list_projects
from app.routers.skills import list_skills
from app.services.mailer import MailDeliveryError, SMTPMailer, get_mailer
from app.utils.helpers import estimate_read_time, format_date_range, truncate_text

logger = logging.getLogger(__name__)

router = APIRouter()

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

HOME_FEATURED_LIMIT = 6
HOME_RECENT_POSTS = 3


def _month_year(value) -> str:
    return value.strftime("%b %Y") if value else ""


templates.env.filters["date_range"] = format_date_range
templates.env.filters["month_year"] = _month_year
templates.env.filters["read_time"] = estimate_read_time
templates.env.filters["truncate_text"] = truncate_text


def _group_skills(skills) -> dict:
    """``{category: [skill, ...]}`` keeping the list's category order."""
    return {category: list(items) for category, items in groupby(skills, key=lambda s: s.category)}


def _not_found(request: Request, message: str) -> HTMLResponse:
    return templates.TemplateResponse(
        request, "404.html", {"message": message}, status_code=404
    )


@router.get("/", response_class=HTMLResponse)
async def home(request: Request, db: AsyncSession = Depends(get_db)):
    profile = await get_or_create_profile(db)
    featured = await list_projects(featured=True, limit=HOME_FEATURED_LIMIT, db=db)
    skills = await list_skills(category=None, db=db)
    posts = await list_posts(published=True, db=db)

    return templates.TemplateResponse(request, "home.html", {
        "profile": profile,
        "projects": featured.projects,
        "skills_by_category": _group_skills(skills.skills),
        "posts": posts.posts[:HOME_RECENT_POSTS],
    })


@router.get("/about", response_class=HTMLResponse)
async def about(request: Request, db: AsyncSession = Depends(get_db)):
    profile = await get_or_create_profile(db)
    experience = await list_experience(db=db)
    education = await list_education(db=db)
    certificates = await list_certificates(db=db)

    return templates.TemplateResponse(request, "about.html", {
        "profile": profile,
        "experience": experience.experience,
        "education": education.education,
        "certificates": certificates.certificates,
    })


@router.get("/projects", response_class=HTMLResponse)
async def projects_page(request: Request, db: AsyncSession = Depends(get_db)):
    projects = await list_projects(featured=None, limit=None, db=db)
    return templates.TemplateResponse(request, "projects.html", {"projects": projects.projects})


@router.get("/projects/{slug}", response_class=HTMLResponse)
async def project_detail(slug: str, request: Request, db: AsyncSession = Depends(get_db)):
    try:
        envelope = await get_project_by_slug(slug, db=db)
    except HTTPException as exc:
        return _not_found(request, exc.detail)

    comments = await list_comments_for(db, project_id=envelope.project.id)
    return templates.TemplateResponse(request, "project_detail.html", {
        "project": envelope.project,
        "comments": [to_comment_response(c) for c in comments],
    })


@router.get("/blog", response_class=HTMLResponse)
async def blog_page(request: Request, db: AsyncSession = Depends(get_db)):
    posts = await list_posts(published=True, db=db)
    return templates.TemplateResponse(request, "blog.html", {"posts": posts.posts})


@router.get("/blog/{slug}", response_class=HTMLResponse)
async def post_detail(
    slug: str,
    request: Request,
    user: Optional[AuthUser] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    """Published posts only; a signed-in admin may preview drafts."""
    result = await db.execute(select(Post).where(Post.slug == slug))
    post = result.scalar_one_or_none()
    if post is None or (not post.published and user is None):
        return _not_found(request, "Post not found")

    await record_view(db, post)
    comments = await list_comments_for(db, post_id=post.id)

    return templates.TemplateResponse(request, "post_detail.html", {
        "post": PostResponse.model_validate(post),
        "comments": [to_comment_response(c) for c in comments],
    })


@router.get("/contact", response_class=HTMLResponse)
async def contact_page(request: Request, db: AsyncSession = Depends(get_db)):
    profile = await get_or_create_profile(db)
    return templates.TemplateResponse(request, "contact.html", {"profile": profile, "form": {}})


@router.post("/contact", response_class=HTMLResponse)
async def contact_submit(
    request: Request,
    name: str = Form(""),
    email: str = Form(""),
    subject: str = Form(""),
    message: str = Form(""),
    budget: str = Form(""),
    timeline: str = Form(""),
    mailer: SMTPMailer = Depends(get_mailer),
    db: AsyncSession = Depends(get_db),
):
    """Plain HTML form post; re-renders the page with the outcome."""
    profile = await get_or_create_profile(db)
    form = {
        "name": name, "email": email, "subject": subject,
        "message": message, "budget": budget, "timeline": timeline,
    }

    try:
        contact = ContactRequest(
            name=name, email=email, subject=subject, message=message,
            budget=budget or None, timeline=timeline or None,
        )
    except ValidationError:
        return templates.TemplateResponse(request, "contact.html", {
            "profile": profile,
            "form": form,
            "error": "Please fill in your name, a valid email, a subject and a message.",
        }, status_code=400)

    try:
        await mailer.send_contact(contact)
    except MailDeliveryError as exc:
        logger.error("Contact page mail from %s failed: %s", email, exc)
        return templates.TemplateResponse(request, "contact.html", {
            "profile": profile,
            "form": form,
            "error": "Failed to send email. Please try again later.",
        }, status_code=500)

    return templates.TemplateResponse(request, "contact.html", {
        "profile": profile,
        "form": {},
        "sent": True,
    })
