"""
Main FastAPI application for the portfolio backend.
Handles CORS, request logging middleware, lifespan events, error envelopes,
static uploads and router registration.
"""
import logging
import os
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.database import close_db, init_db
from app.routers import (
    auth,
    blog,
    certificates,
    comments,
    contact,
    dashboard,
    education,
    experience,
    feedback,
    health,
    likes,
    pages,
    profile,
    projects,
    skills,
    upload,
    visitors,
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


# ---------------------------------------------------------------------------
# Startup / shutdown helpers
# ---------------------------------------------------------------------------

async def _check_database() -> bool:
    """Initialise DB tables and verify the connection.  Returns True on success."""
    try:
        await init_db()
        logger.info("✓ Database connection OK")
        return True
    except Exception as exc:
        logger.error("✗ Database connection failed: %s", exc)
        raise


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown event handler."""
    logger.info("=" * 60)
    logger.info("  Starting portfolio backend …")
    logger.info("=" * 60)

    await _check_database()

    if settings.JWT_SECRET == "fallback-secret-key":
        logger.warning("JWT_SECRET is not set; using the insecure fallback key")
    if not settings.contact_recipient:
        logger.warning("CONTACT_EMAIL / SMTP_USER not set; the contact form will fail")

    logger.info("✓ Upload directory: %s", os.path.abspath(settings.UPLOAD_DIR))

    logger.info("=" * 60)
    logger.info("  Portfolio backend ready on http://%s:%d", settings.HOST, settings.PORT)
    logger.info("  Swagger UI : http://%s:%d/docs", settings.HOST, settings.PORT)
    logger.info("  Health     : http://%s:%d/api/health", settings.HOST, settings.PORT)
    logger.info("=" * 60)

    yield  # ← server is running

    logger.info("Shutting down portfolio backend …")
    await close_db()
    logger.info("✓ Shutdown complete.")


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Portfolio API",
    description=(
        "Personal portfolio and blog backend.\n\n"
        "Public site pages plus JSON endpoints for the admin dashboard. "
        "Every JSON response uses the `{success, <entity>, message?}` envelope.\n\n"
        "Key endpoints:\n"
        "- `POST /api/auth/login` (sets the `token` cookie)\n"
        "- `GET  /api/projects`, `GET /api/projects/slug/{slug}`\n"
        "- `GET  /api/blog`, `GET /api/blog/slug/{slug}`\n"
        "- `POST /api/likes`, `POST /api/comments`, `POST /api/feedback`\n"
        "- `GET  /api/admin/stats`\n"
    ),
    version=API_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Request / response logging middleware
# ---------------------------------------------------------------------------

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Log every request with method, path, status code, and elapsed time.
    Attaches an ``X-Process-Time`` header (milliseconds) to every response.
    """
    t0 = time.monotonic()
    response = await call_next(request)
    elapsed_ms = round((time.monotonic() - t0) * 1000, 2)

    # Skip noisy health-check polling
    if not request.url.path.startswith("/api/health"):
        logger.info(
            "%s %s → %d  (%.2f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )

    response.headers["X-Process-Time"] = f"{elapsed_ms}ms"
    return response


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

def _error(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render ``HTTPException`` detail into the response envelope."""
    return _error(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Request validation failures are 400 with a ``field: reason; ...`` message."""
    parts = []
    for error in exc.errors():
        loc = [str(p) for p in error.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        parts.append(f"{field}: {error.get('msg', 'invalid value')}")

    message = "; ".join(parts) or "Invalid request"
    logger.info("Validation failed on %s %s: %s", request.method, request.url.path, message)
    return _error(status.HTTP_400_BAD_REQUEST, message)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log any unhandled exception and return a static 500 envelope."""
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=True,
    )
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

app.include_router(health.router,       prefix="/api/health",       tags=["Health"])
app.include_router(auth.router,         prefix="/api/auth",         tags=["Auth"])
app.include_router(profile.router,      prefix="/api/profile",      tags=["Profile"])
app.include_router(skills.router,       prefix="/api/skills",       tags=["Skills"])
app.include_router(experience.router,   prefix="/api/experience",   tags=["Experience"])
app.include_router(education.router,    prefix="/api/education",    tags=["Education"])
app.include_router(projects.router,     prefix="/api/projects",     tags=["Projects"])
app.include_router(blog.router,         prefix="/api/blog",         tags=["Blog"])
app.include_router(certificates.router, prefix="/api/certificates", tags=["Certificates"])
app.include_router(comments.router,     prefix="/api/comments",     tags=["Comments"])
app.include_router(likes.router,        prefix="/api/likes",        tags=["Likes"])
app.include_router(feedback.router,     prefix="/api/feedback",     tags=["Feedback"])
app.include_router(contact.router,      prefix="/api/contact",      tags=["Contact"])
app.include_router(upload.router,       prefix="/api/upload",       tags=["Upload"])
app.include_router(visitors.router,     prefix="/api/visitors",     tags=["Visitors"])
app.include_router(dashboard.router,    prefix="/api/admin",        tags=["Admin"])
app.include_router(pages.router,                                    tags=["Pages"], include_in_schema=False)

# StaticFiles checks the directory at mount time
os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
app.mount(settings.UPLOAD_URL_PREFIX, StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")


# ---------------------------------------------------------------------------
# API root
# ---------------------------------------------------------------------------

@app.get("/api", tags=["Root"], include_in_schema=False)
async def root():
    """API root; returns basic service info."""
    return {
        "name": "Portfolio API",
        "version": API_VERSION,
        "description": "Portfolio and blog CMS backend",
        "docs": "/docs",
        "health": "/api/health",
        "endpoints": {
            "auth": "/api/auth",
            "profile": "/api/profile",
            "projects": "/api/projects",
            "blog": "/api/blog",
            "skills": "/api/skills",
            "experience": "/api/experience",
            "education": "/api/education",
            "certificates": "/api/certificates",
            "comments": "/api/comments",
            "likes": "/api/likes",
            "feedback": "/api/feedback",
            "contact": "/api/contact",
            "upload": "/api/upload",
            "visitors": "/api/visitors",
            "stats": "/api/admin/stats",
        },
    }


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True,
        log_level="info",
    )
