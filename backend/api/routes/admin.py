"""
Super-admin API routes: tenants, users, campaigns and application logs.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps_admin import get_current_super_admin_user
from api.schemas.admin import (
    AdminCampaignResponse,
    AdminNewsroomResponse,
    AdminUserUpdateRequest,
    AppLogResponse,
    CreateAccountRequest,
    CreateAccountResponse,
    NewsroomUpdateRequest,
)
from api.schemas.auth import UserResponse
from api.schemas.newsroom import NewsroomResponse
from core.security.password import password_hasher
from infrastructure.database.connection import get_db
from infrastructure.database.models.app_log import LogLevel
from infrastructure.database.models.user import User
from services.campaign_storage import CampaignStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])

SuperAdmin = Annotated[User, Depends(get_current_super_admin_user)]

DEFAULT_STYLESHEET = {
    "name": "Default Brand Voice",
    "description": "Starting point created with the account. Edit to match your newsroom.",
    "tone": "Warm, direct and community-minded",
    "voice": "Trusted local newsroom speaking to its readers",
    "key_messages": ["Independent local journalism depends on reader support"],
    "is_default": True,
}


# ============================================================================
# Newsrooms
# ============================================================================


@router.get("/newsrooms", response_model=list[AdminNewsroomResponse])
async def list_newsrooms(admin_user: SuperAdmin, db: AsyncSession = Depends(get_db)):
    """All newsrooms with their users."""
    storage = CampaignStorage(db)
    newsrooms = await storage.list_newsrooms()
    users = await storage.list_users_by_newsroom_ids([n.id for n in newsrooms])
    return [
        AdminNewsroomResponse(
            **NewsroomResponse.model_validate(n).model_dump(),
            users=[UserResponse.model_validate(u) for u in users.get(n.id, [])],
        )
        for n in newsrooms
    ]


@router.patch("/newsrooms/{newsroom_id}", response_model=NewsroomResponse)
async def update_newsroom(
    newsroom_id: int,
    body: NewsroomUpdateRequest,
    admin_user: SuperAdmin,
    db: AsyncSession = Depends(get_db),
):
    storage = CampaignStorage(db)
    newsroom = await storage.get_newsroom(newsroom_id)
    if newsroom is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Newsroom not found")

    changes = body.model_dump(exclude_unset=True)
    if changes.get("slug") and changes["slug"] != newsroom.slug:
        if await storage.get_newsroom_by_slug(changes["slug"]):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Newsroom slug already exists"
            )

    newsroom = await storage.update_newsroom(newsroom, changes)
    await db.commit()
    logger.info(
        "Newsroom %s updated by admin %s: %s",
        newsroom_id,
        admin_user.id,
        sorted(changes),
        extra={"newsroom_id": newsroom_id},
    )
    return newsroom


# ============================================================================
# Users
# ============================================================================


@router.get("/users", response_model=list[UserResponse])
async def list_users(
    admin_user: SuperAdmin,
    newsroom_id: Optional[int] = None,
    db: AsyncSession = Depends(get_db),
):
    return await CampaignStorage(db).list_users(newsroom_id=newsroom_id)


@router.patch("/users/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    body: AdminUserUpdateRequest,
    admin_user: SuperAdmin,
    db: AsyncSession = Depends(get_db),
):
    """
    Update a user's profile, role, newsroom or password.

    A new password is hashed before storage; email must stay unique.
    """
    storage = CampaignStorage(db)
    user = await storage.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    changes = body.model_dump(exclude_unset=True)

    if changes.get("email"):
        existing = await storage.get_user_by_email(changes["email"])
        if existing is not None and existing.id != user.id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists"
            )

    if changes.get("newsroom_id") is not None:
        if await storage.get_newsroom(changes["newsroom_id"]) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Newsroom not found")

    password = changes.pop("password", None)
    if password:
        changes["password_hash"] = password_hasher.hash(password)

    user = await storage.update_user(user, changes)
    await db.commit()
    logger.info("User %s updated by admin %s", user_id, admin_user.id)
    return user


@router.post(
    "/accounts", response_model=CreateAccountResponse, status_code=status.HTTP_201_CREATED
)
async def create_account(
    body: CreateAccountRequest,
    admin_user: SuperAdmin,
    db: AsyncSession = Depends(get_db),
):
    """Create a newsroom, its first user and a default brand stylesheet."""
    storage = CampaignStorage(db)

    if await storage.get_user_by_email(body.user_email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")
    if await storage.get_newsroom_by_slug(body.newsroom_slug):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Newsroom slug already exists"
        )

    newsroom = await storage.create_newsroom(
        name=body.newsroom_name,
        slug=body.newsroom_slug,
        description=body.newsroom_description,
        website=body.newsroom_website,
    )
    user = await storage.create_user(
        email=body.user_email,
        name=body.user_name,
        password_hash=password_hasher.hash(body.user_password),
        role=body.user_role,
        newsroom_id=newsroom.id,
    )
    stylesheet = await storage.create_brand_stylesheet(newsroom_id=newsroom.id, **DEFAULT_STYLESHEET)
    await db.commit()

    logger.info(
        "Account created for newsroom '%s' by admin %s",
        newsroom.slug,
        admin_user.id,
        extra={"newsroom_id": newsroom.id, "user_id": user.id},
    )
    return {"newsroom": newsroom, "user": user, "stylesheet_id": stylesheet.id}


# ============================================================================
# Campaigns and logs
# ============================================================================


@router.get("/campaigns", response_model=list[AdminCampaignResponse])
async def list_all_campaigns(
    admin_user: SuperAdmin,
    limit: int = Query(200, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
):
    """Most recent campaigns across every newsroom."""
    storage = CampaignStorage(db)
    campaigns = await storage.list_campaigns(limit=limit)
    names = {n.id: n.name for n in await storage.list_newsrooms()}
    return [
        AdminCampaignResponse.model_validate(c).model_copy(
            update={"newsroom_name": names.get(c.newsroom_id)}
        )
        for c in campaigns
    ]


@router.get("/logs", response_model=list[AppLogResponse])
async def list_logs(
    admin_user: SuperAdmin,
    level: Optional[LogLevel] = None,
    limit: int = Query(500, ge=1, le=5000),
    db: AsyncSession = Depends(get_db),
):
    return await CampaignStorage(db).list_logs(
        level=level.value if level else None, limit=limit
    )
