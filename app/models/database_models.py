"""
SQLAlchemy ORM models for the portfolio database.
Records are flat documents keyed by string UUIDs; list and map fields use JSON columns.
"""
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    ForeignKey,
    Boolean,
    JSON,
)
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
import enum
import uuid

from app.database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Enums
class UserRole(str, enum.Enum):
    """Roles an account can hold."""

    ADMIN = "admin"
    EDITOR = "editor"


# Models
class User(Base):
    """Admin account used to sign in to the dashboard."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)
    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(50), nullable=False, default=UserRole.ADMIN.value)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)


class Profile(Base):
    """Site owner's profile (one row in practice)."""

    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=_new_id)
    full_name = Column(String(255), nullable=False)
    title = Column(String(255), nullable=False)
    bio = Column(Text, nullable=False, default="")
    short_bio = Column(String(500), nullable=False, default="")
    location = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(64), nullable=True)
    profile_pic = Column(String(512), nullable=True)
    resume = Column(String(512), nullable=True)
    social_links = Column(JSON, nullable=False, default=dict)  # {"github": "...", "linkedin": "..."}
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class Skill(Base):
    """A single skill with a 0-100 proficiency level."""

    __tablename__ = "skills"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    level = Column(Integer, nullable=False, default=50)
    category = Column(String(255), nullable=False, index=True)
    order = Column(Integer, nullable=False, default=0)


class Experience(Base):
    """Work history entry."""

    __tablename__ = "experience"

    id = Column(String(36), primary_key=True, default=_new_id)
    title = Column(String(255), nullable=False)
    company = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False, default="")
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=True)
    current = Column(Boolean, nullable=False, default=False)
    description = Column(Text, nullable=False, default="")
    order = Column(Integer, nullable=False, default=0)


class Education(Base):
    """Education history entry."""

    __tablename__ = "education"

    id = Column(String(36), primary_key=True, default=_new_id)
    institution = Column(String(255), nullable=False)
    degree = Column(String(255), nullable=False)
    field = Column(String(255), nullable=False, default="")
    location = Column(String(255), nullable=False, default="")
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=True)
    current = Column(Boolean, nullable=False, default=False)
    description = Column(Text, nullable=False, default="")
    order = Column(Integer, nullable=False, default=0)


class Project(Base):
    """Portfolio project."""

    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=_new_id)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    content = Column(Text, nullable=False)  # Markdown body
    cover_image = Column(String(512), nullable=True)
    github_url = Column(String(512), nullable=True)
    demo_url = Column(String(512), nullable=True)
    featured = Column(Boolean, nullable=False, default=False, index=True)
    tags = Column(JSON, nullable=False, default=list)  # ["Python", "FastAPI"]
    order = Column(Integer, nullable=False, default=0)
    likes = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    comments = relationship("Comment", back_populates="project", cascade="all, delete-orphan")


class Post(Base):
    """Blog post."""

    __tablename__ = "posts"

    id = Column(String(36), primary_key=True, default=_new_id)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    title = Column(String(255), nullable=False)
    excerpt = Column(Text, nullable=False, default="")
    content = Column(Text, nullable=False, default="")
    cover_image = Column(String(512), nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    published = Column(Boolean, nullable=False, default=False, index=True)
    views = Column(Integer, nullable=False, default=0)
    likes = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    comments = relationship("Comment", back_populates="post", cascade="all, delete-orphan")


class Certificate(Base):
    """Professional certificate."""

    __tablename__ = "certificates"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    issuer = Column(String(255), nullable=False)
    issue_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    expiry_date = Column(DateTime(timezone=True), nullable=True)
    credential_id = Column(String(255), nullable=True)
    credential_url = Column(String(512), nullable=True)
    description = Column(Text, nullable=True)
    image = Column(String(512), nullable=True)
    order = Column(Integer, nullable=False, default=0)


class Comment(Base):
    """Visitor comment attached to either a project or a post."""

    __tablename__ = "comments"

    id = Column(String(36), primary_key=True, default=_new_id)
    content = Column(Text, nullable=False)
    author = Column(String(255), nullable=False, default="Anonymous")
    project_id = Column(String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=True, index=True)
    post_id = Column(String(36), ForeignKey("posts.id", ondelete="CASCADE"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Relationships
    project = relationship("Project", back_populates="comments")
    post = relationship("Post", back_populates="comments")


class Feedback(Base):
    """Site feedback left from the public feedback widget."""

    __tablename__ = "feedback"

    id = Column(String(36), primary_key=True, default=_new_id)
    message = Column(Text, nullable=False)
    email = Column(String(255), nullable=True)
    rating = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)


class Visitor(Base):
    """One recorded page visit."""

    __tablename__ = "visitors"

    id = Column(String(36), primary_key=True, default=_new_id)
    path = Column(String(512), nullable=False)
    referrer = Column(String(512), nullable=True)
    user_agent = Column(String(512), nullable=True)
    ip_address = Column(String(64), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
