"""
Shared fixtures for portfolio backend integration tests.

Each test gets a fresh SQLite database file (aiosqlite) under pytest's
tmp_path, with tables created from the ORM metadata.  The app's ``get_db``
dependency is overridden to hand out the per-test session, and SMTP is
replaced by an in-memory mailer.
"""
from __future__ import annotations

import os
import tempfile
from typing import AsyncGenerator, List

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

# Point settings at throwaway locations *before* any app module is imported,
# so the global engine and the static uploads mount never touch real paths.
_SCRATCH_DIR = tempfile.mkdtemp(prefix="portfolio-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_SCRATCH_DIR}/app.db"
os.environ["UPLOAD_DIR"] = os.path.join(_SCRATCH_DIR, "uploads")
os.environ["JWT_SECRET"] = "test-secret"
os.environ["CONTACT_EMAIL"] = "owner@example.com"

from app.config import settings  # noqa: E402
from app.database import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models.database_models import User  # noqa: E402
from app.models.schemas import ContactRequest  # noqa: E402
from app.services.mailer import MailDeliveryError, get_mailer  # noqa: E402
from app.services.security import create_access_token, hash_password  # noqa: E402

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct-horse"


class FakeMailer:
    """Collects contact messages instead of talking to SMTP."""

    def __init__(self) -> None:
        self.sent: List[ContactRequest] = []
        self.fail = False

    async def send_contact(self, form: ContactRequest) -> None:
        if self.fail:
            raise MailDeliveryError("SMTP unavailable")
        self.sent.append(form)


# ---------------------------------------------------------------------------
# Per-test fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def db_session(tmp_path) -> AsyncGenerator[AsyncSession, None]:
    """A session on a brand-new database; nothing leaks between tests."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,
        poolclass=NullPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    await engine.dispose()


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture(autouse=True)
def upload_dir(tmp_path, monkeypatch) -> str:
    path = str(tmp_path / "uploads")
    monkeypatch.setattr(settings, "UPLOAD_DIR", path)
    return path


@pytest_asyncio.fixture
async def client(db_session: AsyncSession, mailer: FakeMailer) -> AsyncGenerator[AsyncClient, None]:
    """
    httpx AsyncClient wired to the FastAPI app with the DB and mail
    dependencies overridden.
    """

    async def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_mailer] = lambda: mailer

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> User:
    user = User(
        name="Admin User",
        email=ADMIN_EMAIL,
        password_hash=hash_password(ADMIN_PASSWORD),
        role="admin",
    )
    db_session.add(user)
    await db_session.flush()
    await db_session.refresh(user)
    return user


@pytest.fixture
def auth_headers(admin_user: User) -> dict:
    token = create_access_token({"id": admin_user.id, "email": admin_user.email, "role": admin_user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def editor_headers() -> dict:
    """Signed-in account without the admin role."""
    token = create_access_token({"id": "editor-1", "email": "editor@example.com", "role": "editor"})
    return {"Authorization": f"Bearer {token}"}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

PROJECT_PAYLOAD = {
    "title": "My Cool Project!",
    "description": "A short description",
    "content": "# Heading\n\nBody text",
    "tags": ["Python", "FastAPI"],
}

POST_PAYLOAD = {
    "title": "Hello World",
    "excerpt": "First post",
    "content": "Some words here",
    "tags": ["Notes"],
    "published": True,
}


async def create_project(client: AsyncClient, headers: dict, **overrides) -> dict:
    resp = await client.post("/api/projects", json={**PROJECT_PAYLOAD, **overrides}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["project"]


async def create_post(client: AsyncClient, headers: dict, **overrides) -> dict:
    resp = await client.post("/api/blog", json={**POST_PAYLOAD, **overrides}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["post"]
