"""
Seed the database with an admin account and demo portfolio content.

Each collection is filled only when it is empty, so the script is safe to
re-run.  ``--reset`` drops and recreates every table first.

    python seed_database.py
    python seed_database.py --reset
"""
import argparse
import asyncio
import logging
import sys

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app import seed_data
from app.config import settings
from app.database import AsyncSessionLocal, Base, close_db, engine
from app.models.database_models import (
    Certificate,
    Education,
    Experience,
    Post,
    Profile,
    Project,
    Skill,
    User,
    UserRole,
)
from app.services.security import hash_password
from app.services.slugs import unique_slug

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("seed_database")


async def _is_empty(db: AsyncSession, model) -> bool:
    count = (await db.execute(select(func.count()).select_from(model))).scalar_one()
    return count == 0


async def reset_schema() -> None:
    from app.models import database_models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Dropped and recreated all tables")


async def create_schema() -> None:
    from app.models import database_models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_admin(db: AsyncSession) -> None:
    existing = await db.execute(select(User).where(User.email == settings.ADMIN_EMAIL))
    if existing.scalar_one_or_none() is not None:
        logger.info("Admin user %s already exists", settings.ADMIN_EMAIL)
        return

    db.add(User(
        email=settings.ADMIN_EMAIL,
        name=settings.ADMIN_NAME,
        password_hash=hash_password(settings.ADMIN_PASSWORD),
        role=UserRole.ADMIN.value,
    ))
    logger.info("Created admin user %s", settings.ADMIN_EMAIL)


async def seed_rows(db: AsyncSession, model, rows, label: str) -> None:
    if not await _is_empty(db, model):
        logger.info("%s already present, skipping", label)
        return
    for row in rows:
        db.add(model(**row))
    logger.info("Created %d %s", len(rows), label)


async def seed_slugged(db: AsyncSession, model, rows, label: str) -> None:
    """Like ``seed_rows`` but derives each record's slug from its title."""
    if not await _is_empty(db, model):
        logger.info("%s already present, skipping", label)
        return
    for row in rows:
        record = model(slug=await unique_slug(db, model, row["title"]), **row)
        db.add(record)
        # Flush so the next slug lookup sees this one
        await db.flush()
    logger.info("Created %d %s", len(rows), label)


async def seed(reset: bool = False) -> None:
    if reset:
        await reset_schema()
    else:
        await create_schema()

    async with AsyncSessionLocal() as db:
        try:
            await seed_admin(db)
            await seed_rows(db, Profile, [seed_data.DEFAULT_PROFILE], "profile")
            await seed_rows(db, Skill, seed_data.SKILLS, "skills")
            await seed_rows(db, Experience, seed_data.EXPERIENCE, "experience entries")
            await seed_rows(db, Education, seed_data.EDUCATION, "education entries")
            await seed_slugged(db, Project, seed_data.PROJECTS, "projects")
            await seed_rows(db, Certificate, seed_data.CERTIFICATES, "certificates")
            await seed_slugged(db, Post, seed_data.POSTS, "posts")
            await db.commit()
        except Exception:
            await db.rollback()
            raise

    logger.info("Seeding complete. Sign in as %s", settings.ADMIN_EMAIL)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Seed the portfolio database with demo content.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="drop and recreate all tables before seeding",
    )
    args = parser.parse_args(argv)

    async def run():
        try:
            await seed(reset=args.reset)
        finally:
            await close_db()

    try:
        asyncio.run(run())
    except Exception as exc:
        logger.error("Seeding failed: %s", exc, exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
