"""
Dashboard account endpoints.

POST /login             verify credentials, set the ``token`` cookie
POST /logout            clear the cookie
GET  /me                current account
POST /register          create another account (admin role required)
POST /change-password   rotate the current account's password
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.dependencies.auth import (
    get_current_db_user,
    require_admin_role,
)
from app.models.database_models import User
from app.models.schemas import (
    AuthUser,
    ChangePasswordRequest,
    Envelope,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserEnvelope,
    UserResponse,
)
from app.services.security import (
    create_access_token,
    decode_access_token,
    extract_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        path="/",
        secure=settings.COOKIE_SECURE or settings.is_production,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        samesite="lax",
    )


def _clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(settings.AUTH_COOKIE_NAME, path="/")


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> LoginResponse:
    result = await db.execute(select(User).where(User.email == body.email))
    user = result.scalar_one_or_none()

    # Same message for unknown email and wrong password
    if user is None or not verify_password(body.password, user.password_hash):
        logger.warning("Failed login attempt for %s", body.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    token = create_access_token({"id": user.id, "email": user.email, "role": user.role})
    _set_auth_cookie(response, token)
    logger.info("User %s logged in", user.email)

    return LoginResponse(user=UserResponse.model_validate(user), token=token)


@router.post("/logout", response_model=Envelope)
async def logout(response: Response) -> Envelope:
    _clear_auth_cookie(response)
    return Envelope(message="Logged out successfully")


@router.get("/me", response_model=UserEnvelope)
async def me(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> UserEnvelope:
    """Return the signed-in account; a stale cookie is cleared on failure."""
    token = extract_token(request)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    payload = decode_access_token(token)
    user = None
    if payload and "id" in payload:
        result = await db.execute(select(User).where(User.id == payload["id"]))
        user = result.scalar_one_or_none()

    if user is None:
        detail = "Invalid or expired token" if not payload else "User not found"
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"set-cookie": f"{settings.AUTH_COOKIE_NAME}=; Max-Age=0; Path=/"},
        )

    return UserEnvelope(user=UserResponse.model_validate(user))


@router.post("/register", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    admin: AuthUser = Depends(require_admin_role),
    db: AsyncSession = Depends(get_db),
) -> UserEnvelope:
    existing = await db.execute(select(User.id).where(User.email == body.email))
    if existing.first() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User with this email already exists",
        )

    user = User(
        name=body.name,
        email=body.email,
        password_hash=hash_password(body.password),
        role=body.role,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)

    logger.info("Registered user %s (role=%s) by %s", user.email, user.role, admin.email)
    return UserEnvelope(user=UserResponse.model_validate(user), message="User registered successfully")


@router.post("/change-password", response_model=Envelope)
async def change_password(
    body: ChangePasswordRequest,
    user: User = Depends(get_current_db_user),
    db: AsyncSession = Depends(get_db),
) -> Envelope:
    if len(body.new_password) < settings.MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"New password must be at least {settings.MIN_PASSWORD_LENGTH} characters long",
        )

    if not verify_password(body.current_password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect",
        )

    user.password_hash = hash_password(body.new_password)
    await db.flush()
    logger.info("Password changed for %s", user.email)

    return Envelope(message="Password updated successfully")
