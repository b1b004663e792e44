"""
Admin request and response schemas.
"""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from api.schemas.auth import UserResponse
from api.schemas.campaign import CampaignResponse
from api.schemas.newsroom import NewsroomResponse
from api.schemas.partial import PartialUpdate
from core.security.password import MIN_PASSWORD_LENGTH


class AdminNewsroomResponse(NewsroomResponse):
    """Newsroom with its users attached."""

    users: list[UserResponse] = Field(default_factory=list)


class AdminCampaignResponse(CampaignResponse):
    newsroom_name: Optional[str] = None


class NewsroomUpdateRequest(PartialUpdate):
    non_nullable = ("name", "slug", "is_active")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255, pattern=r"^[a-z0-9-]+$")
    description: Optional[str] = None
    website: Optional[str] = None
    logo: Optional[str] = None
    is_active: Optional[bool] = None


class AdminUserUpdateRequest(PartialUpdate):
    non_nullable = ("name", "email", "password", "role")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=MIN_PASSWORD_LENGTH, max_length=128)
    role: Optional[Literal["admin", "user"]] = None
    newsroom_id: Optional[int] = None


class CreateAccountRequest(BaseModel):
    """Creates a newsroom, its first user and a default stylesheet in one call."""

    newsroom_name: str = Field(..., min_length=1, max_length=255)
    newsroom_slug: str = Field(..., min_length=1, max_length=255, pattern=r"^[a-z0-9-]+$")
    newsroom_description: Optional[str] = None
    newsroom_website: Optional[str] = None
    user_name: str = Field(..., min_length=1, max_length=255)
    user_email: EmailStr
    user_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)
    user_role: Literal["admin", "user"] = "user"


class CreateAccountResponse(BaseModel):
    newsroom: NewsroomResponse
    user: UserResponse
    stylesheet_id: int


class AppLogCreate(BaseModel):
    level: Literal["debug", "info", "warn", "error"] = "info"
    message: str = Field(..., min_length=1)
    context: Optional[dict[str, Any]] = None


class AppLogResponse(BaseModel):
    id: int
    level: str
    message: str
    context: Optional[dict[str, Any]] = None
    user_id: Optional[int] = None
    newsroom_id: Optional[int] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AppLogBatch(BaseModel):
    """Client loggers flush their queue in batches."""

    logs: list[AppLogCreate] = Field(..., min_length=1, max_length=100)
