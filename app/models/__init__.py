"""Database and schema models for the portfolio backend."""
from app.models.database_models import (
    User,
    Profile,
    Skill,
    Experience,
    Education,
    Project,
    Post,
    Certificate,
    Comment,
    Feedback,
    Visitor,
    UserRole,
)
from app.models.schemas import (
    ProjectCreate,
    ProjectResponse,
    PostCreate,
    PostResponse,
    CommentResponse,
    LikeRequest,
    HealthCheckResponse,
)

__all__ = [
    # Database models
    "User",
    "Profile",
    "Skill",
    "Experience",
    "Education",
    "Project",
    "Post",
    "Certificate",
    "Comment",
    "Feedback",
    "Visitor",
    "UserRole",
    # Pydantic schemas
    "ProjectCreate",
    "ProjectResponse",
    "PostCreate",
    "PostResponse",
    "CommentResponse",
    "LikeRequest",
    "HealthCheckResponse",
]
