"""
Authentication API routes.
"""

import logging
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.middleware.rate_limit import get_rate_limit, limiter
from api.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RefreshTokenRequest,
    TokenResponse,
    UserResponse,
)
from core.security.password import password_hasher
from core.security.tokens import TokenService
from infrastructure.config.settings import settings
from infrastructure.database.connection import get_db
from infrastructure.database.models.user import User
from services.campaign_storage import CampaignStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])

token_service = TokenService(
    secret_key=settings.jwt_secret_key,
    algorithm=settings.jwt_algorithm,
    access_token_expire_minutes=settings.jwt_access_token_expire_minutes,
    refresh_token_expire_days=settings.jwt_refresh_token_expire_days,
)


def _user_id_from_subject(sub: str) -> int | None:
    try:
        return int(sub)
    except (TypeError, ValueError):
        return None


async def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Dependency to get the current authenticated user from a Bearer token.
    """
    token = None
    if authorization and authorization.startswith("Bearer "):
        parts = authorization.split(" ", 1)
        token = parts[1] if len(parts) > 1 and parts[1] else None

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = token_service.verify_access_token(token)
    user_id = _user_id_from_subject(payload.sub) if payload else None

    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await CampaignStorage(db).get_user(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


def _token_response(user: User) -> dict:
    access_token, refresh_token = token_service.create_token_pair(
        user.id, role=user.role, newsroom_id=user.newsroom_id
    )
    return {
        "access_token": access_token,
        "refresh_token": refresh_token,
        "token_type": "bearer",
        "expires_in": settings.jwt_access_token_expire_minutes * 60,
    }


@router.post("/login", response_model=LoginResponse)
@limiter.limit(get_rate_limit("login"))
async def login(
    request: Request,
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Authenticate with email and password.

    Users of a deactivated newsroom are refused unless they are admins.
    """
    storage = CampaignStorage(db)
    user = await storage.get_user_by_email(body.email)

    if not user or not password_hasher.verify(body.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    if user.newsroom_id is not None and not user.is_admin:
        newsroom = await storage.get_newsroom(user.newsroom_id)
        if newsroom is not None and not newsroom.is_active:
            logger.info("Login refused for user %s: newsroom %s inactive", user.id, newsroom.id)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Your newsroom account has been deactivated. Please contact support.",
            )

    await storage.update_user(
        user,
        {"last_login": datetime.now(UTC), "login_count": (user.login_count or 0) + 1},
    )
    await db.commit()

    logger.info("User %s logged in", user.id, extra={"user_id": user.id})
    return {**_token_response(user), "user": UserResponse.model_validate(user)}


@router.post("/refresh", response_model=TokenResponse)
async def refresh_tokens(
    body: RefreshTokenRequest,
    db: AsyncSession = Depends(get_db),
):
    """Exchange a refresh token for a new token pair."""
    payload = token_service.verify_refresh_token(body.refresh_token)
    user_id = _user_id_from_subject(payload.sub) if payload else None
    user = await CampaignStorage(db).get_user(user_id) if user_id is not None else None
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        )
    return _token_response(user)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: Annotated[User, Depends(get_current_user)]):
    """Return the authenticated user."""
    return current_user
