"""
Pydantic schemas for request/response validation.

Wire names are camelCase (``coverImage``, ``githubUrl``); snake_case is also
accepted on input.  Every response is wrapped in the
``{success, <entity>, message?}`` envelope.
"""
from pydantic import BaseModel, Field, ConfigDict, EmailStr, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict, Any
from datetime import datetime
from enum import Enum


class CamelModel(BaseModel):
    """Base model: camelCase aliases, populate by field name, read from ORM objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Envelope(CamelModel):
    """Common response envelope fields."""

    success: bool = True
    message: Optional[str] = None


# Enums
class LikeTargetSchema(str, Enum):
    """Entity kinds that can be liked."""

    PROJECT = "project"
    POST = "post"


class LikeAction(str, Enum):
    LIKE = "like"
    UNLIKE = "unlike"


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------

class LoginRequest(CamelModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=1)
    role: str = "admin"


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)


class UserResponse(CamelModel):
    id: str
    email: str
    name: Optional[str] = None
    role: str
    created_at: Optional[datetime] = None


class AuthUser(BaseModel):
    """Identity carried inside a verified access token."""

    id: str
    email: str
    role: str


class UserEnvelope(Envelope):
    user: UserResponse


class LoginResponse(Envelope):
    user: UserResponse
    token: str


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------

class ProfileUpdate(CamelModel):
    """All fields optional; only provided fields are merged."""

    full_name: Optional[str] = None
    title: Optional[str] = None
    bio: Optional[str] = None
    short_bio: Optional[str] = None
    location: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    profile_pic: Optional[str] = None
    resume: Optional[str] = None
    social_links: Optional[Dict[str, str]] = None


class ProfileResponse(CamelModel):
    id: str
    full_name: str
    title: str
    bio: str = ""
    short_bio: str = ""
    location: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    profile_pic: Optional[str] = None
    resume: Optional[str] = None
    social_links: Dict[str, str] = {}
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProfileEnvelope(Envelope):
    profile: ProfileResponse


# ---------------------------------------------------------------------------
# Skills
# ---------------------------------------------------------------------------

class SkillCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=255)
    level: Optional[int] = Field(None, ge=0, le=100)
    proficiency: Optional[int] = Field(None, ge=0, le=100)  # legacy alias for level
    order: int = 0

    def resolved_level(self) -> int:
        if self.level is not None:
            return self.level
        if self.proficiency is not None:
            return self.proficiency
        return 50


class SkillUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[str] = Field(None, min_length=1, max_length=255)
    level: Optional[int] = Field(None, ge=0, le=100)
    proficiency: Optional[int] = Field(None, ge=0, le=100)
    order: Optional[int] = None


class SkillResponse(CamelModel):
    id: str
    name: str
    level: int
    category: str
    order: int = 0


class SkillEnvelope(Envelope):
    skill: SkillResponse


class SkillListEnvelope(Envelope):
    skills: List[SkillResponse]


# ---------------------------------------------------------------------------
# Experience / Education
# ---------------------------------------------------------------------------

class ExperienceCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    company: str = Field(..., min_length=1, max_length=255)
    location: str = ""
    start_date: datetime
    end_date: Optional[datetime] = None
    current: bool = False
    description: str = ""
    order: int = 0


class ExperienceUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    company: Optional[str] = Field(None, min_length=1, max_length=255)
    location: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    current: Optional[bool] = None
    description: Optional[str] = None
    order: Optional[int] = None


class ExperienceResponse(CamelModel):
    id: str
    title: str
    company: str
    location: str = ""
    start_date: datetime
    end_date: Optional[datetime] = None
    current: bool = False
    description: str = ""
    order: int = 0


class ExperienceEnvelope(Envelope):
    experience: ExperienceResponse


class ExperienceListEnvelope(Envelope):
    experience: List[ExperienceResponse]


class EducationCreate(CamelModel):
    institution: str = Field(..., min_length=1, max_length=255)
    degree: str = Field(..., min_length=1, max_length=255)
    field: str = ""
    location: str = ""
    start_date: datetime
    end_date: Optional[datetime] = None
    current: bool = False
    description: str = ""
    order: int = 0


class EducationUpdate(CamelModel):
    institution: Optional[str] = Field(None, min_length=1, max_length=255)
    degree: Optional[str] = Field(None, min_length=1, max_length=255)
    field: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    current: Optional[bool] = None
    description: Optional[str] = None
    order: Optional[int] = None


class EducationResponse(CamelModel):
    id: str
    institution: str
    degree: str
    field: str = ""
    location: str = ""
    start_date: datetime
    end_date: Optional[datetime] = None
    current: bool = False
    description: str = ""
    order: int = 0


class EducationEnvelope(Envelope):
    education: EducationResponse


class EducationListEnvelope(Envelope):
    education: List[EducationResponse]


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------

class ProjectCreate(CamelModel):
    """Title, description and content are required; everything else is optional."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    cover_image: Optional[str] = None
    github_url: Optional[str] = None
    demo_url: Optional[str] = None
    featured: bool = False
    tags: List[str] = Field(default_factory=list)
    order: int = 0


class ProjectUpdate(ProjectCreate):
    """
    Same required fields as create.  Optional fields are written only when
    present in the request body (checked via ``model_fields_set``).
    """


class ProjectResponse(CamelModel):
    id: str
    slug: str
    title: str
    description: str
    content: str
    cover_image: Optional[str] = None
    github_url: Optional[str] = None
    demo_url: Optional[str] = None
    featured: bool = False
    tags: List[str] = []
    order: int = 0
    likes: int = 0
    comment_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProjectEnvelope(Envelope):
    project: ProjectResponse


class ProjectListEnvelope(Envelope):
    projects: List[ProjectResponse]


# ---------------------------------------------------------------------------
# Blog posts
# ---------------------------------------------------------------------------

class PostCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=255)
    excerpt: str = ""
    content: str = ""
    cover_image: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    published: bool = False

    @field_validator("slug")
    @classmethod
    def blank_slug_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class PostUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=255)
    excerpt: Optional[str] = None
    content: Optional[str] = None
    cover_image: Optional[str] = None
    tags: Optional[List[str]] = None
    published: Optional[bool] = None

    @field_validator("slug")
    @classmethod
    def blank_slug_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class PostResponse(CamelModel):
    id: str
    slug: str
    title: str
    excerpt: str = ""
    content: str = ""
    cover_image: Optional[str] = None
    tags: List[str] = []
    published: bool = False
    views: int = 0
    likes: int = 0
    comment_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PostEnvelope(Envelope):
    post: PostResponse


class PostListEnvelope(Envelope):
    posts: List[PostResponse]


# ---------------------------------------------------------------------------
# Certificates
# ---------------------------------------------------------------------------

class CertificateCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    issuer: str = Field(..., min_length=1, max_length=255)
    issue_date: Optional[datetime] = None
    expiry_date: Optional[datetime] = None
    credential_id: Optional[str] = None
    credential_url: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    order: int = 0


class CertificateUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    issuer: Optional[str] = Field(None, min_length=1, max_length=255)
    issue_date: Optional[datetime] = None
    expiry_date: Optional[datetime] = None
    credential_id: Optional[str] = None
    credential_url: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    order: Optional[int] = None


class CertificateResponse(CamelModel):
    id: str
    name: str
    issuer: str
    issue_date: datetime
    expiry_date: Optional[datetime] = None
    credential_id: Optional[str] = None
    credential_url: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    order: int = 0


class CertificateEnvelope(Envelope):
    certificate: CertificateResponse


class CertificateListEnvelope(Envelope):
    certificates: List[CertificateResponse]


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------

class CommentCreate(CamelModel):
    content: str = Field(..., min_length=1)
    author: Optional[str] = None
    project_id: Optional[str] = None
    post_id: Optional[str] = None


class ContentSummary(CamelModel):
    """Title + slug of the project or post a comment belongs to."""

    title: str
    slug: str


class CommentResponse(CamelModel):
    id: str
    content: str
    author: str
    project_id: Optional[str] = None
    post_id: Optional[str] = None
    created_at: Optional[datetime] = None
    project: Optional[ContentSummary] = None
    post: Optional[ContentSummary] = None


class CommentEnvelope(Envelope):
    comment: CommentResponse


class CommentListEnvelope(Envelope):
    comments: List[CommentResponse]


# ---------------------------------------------------------------------------
# Likes
# ---------------------------------------------------------------------------

class LikeRequest(CamelModel):
    type: LikeTargetSchema
    id: str = Field(..., min_length=1)
    action: LikeAction = LikeAction.LIKE


class LikeResponse(Envelope):
    likes: int


# ---------------------------------------------------------------------------
# Feedback / contact / visitors
# ---------------------------------------------------------------------------

class FeedbackCreate(CamelModel):
    message: str = Field(..., min_length=1)
    email: Optional[str] = None
    rating: int = Field(0, ge=0, le=5)


class FeedbackResponse(CamelModel):
    id: str
    message: str
    email: Optional[str] = None
    rating: int = 0
    created_at: Optional[datetime] = None


class FeedbackEnvelope(Envelope):
    feedback: FeedbackResponse


class FeedbackListEnvelope(Envelope):
    feedback: List[FeedbackResponse]


class ContactRequest(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    subject: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    budget: Optional[str] = None
    timeline: Optional[str] = None


class VisitCreate(CamelModel):
    path: str = Field(..., min_length=1, max_length=512)
    referrer: Optional[str] = Field(None, max_length=512)


class VisitorResponse(CamelModel):
    id: str
    path: str
    referrer: Optional[str] = None
    user_agent: Optional[str] = None
    ip_address: Optional[str] = None
    created_at: Optional[datetime] = None


class VisitorEnvelope(Envelope):
    visitor: VisitorResponse


class VisitorListEnvelope(Envelope):
    visitors: List[VisitorResponse]


# ---------------------------------------------------------------------------
# Upload / dashboard / health
# ---------------------------------------------------------------------------

class UploadResponse(Envelope):
    url: str
    public_id: str


class DashboardStats(CamelModel):
    total_projects: int = 0
    featured_projects: int = 0
    total_posts: int = 0
    published_posts: int = 0
    total_visitors: int = 0
    certificates: int = 0
    comments: int = 0
    feedback: int = 0


class DailyVisits(CamelModel):
    date: str  # YYYY-MM-DD
    count: int


class DashboardEnvelope(Envelope):
    stats: DashboardStats
    recent_visitors: List[DailyVisits] = []


class HealthCheckResponse(BaseModel):
    """Schema for health check response."""

    status: str
    database: str
    timestamp: datetime
    metadata: Dict[str, Any] = {}
