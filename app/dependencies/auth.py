"""
Authentication dependencies for FastAPI routes.

Admin endpoints depend on ``require_admin``, which reads the access token from
the ``token`` cookie (set at login) or an ``Authorization: Bearer`` header.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.database_models import User, UserRole
from app.models.schemas import AuthUser
from app.services.security import decode_access_token, extract_token

logger = logging.getLogger(__name__)


async def get_optional_user(request: Request) -> Optional[AuthUser]:
    """Identity from a valid token, or None when absent or invalid."""
    token = extract_token(request)
    if not token:
        return None
    payload = decode_access_token(token)
    if not payload:
        return None
    return AuthUser(id=payload["id"], email=payload["email"], role=payload.get("role", ""))


async def get_current_user(request: Request) -> AuthUser:
    """Identity from the request's token. Raises 401 if missing or invalid."""
    token = extract_token(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication token is missing",
        )

    payload = decode_access_token(token)
    if not payload or "id" not in payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
        )

    return AuthUser(id=payload["id"], email=payload.get("email", ""), role=payload.get("role", ""))


async def require_admin(user: AuthUser = Depends(get_current_user)) -> AuthUser:
    """Any signed-in dashboard account may manage content."""
    return user


async def require_admin_role(user: AuthUser = Depends(get_current_user)) -> AuthUser:
    """Stricter gate for account management: role must be ``admin``."""
    if user.role != UserRole.ADMIN.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unauthorized - Admin privileges required",
        )
    return user


async def get_current_db_user(
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Load the token's account from the users table. 404 if it no longer exists."""
    result = await db.execute(select(User).where(User.id == user.id))
    db_user = result.scalar_one_or_none()

    if db_user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    return db_user
