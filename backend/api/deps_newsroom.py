"""
Newsroom tenancy dependencies.

Every tenant-owned row carries ``newsroom_id``. Regular users and newsroom
admins may only touch rows of their own newsroom; super-admins may touch
any.
"""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.routes.auth import get_current_user
from infrastructure.database.connection import get_db
from infrastructure.database.models.newsroom import BrandStylesheet, Newsroom
from infrastructure.database.models.user import User
from services.campaign_storage import CampaignStorage


def require_newsroom_access(user: User, newsroom_id: int) -> None:
    """
    Raise 403 unless ``user`` may act on ``newsroom_id``.

    Raises:
        HTTPException: 403 on cross-tenant access
    """
    if not user.can_access_newsroom(newsroom_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have access to this newsroom",
        )


def ensure_owned(obj, user: User, name: str):
    """
    Return a tenant-owned row after checking it exists and belongs to the user.

    Raises:
        HTTPException: 404 if missing, 403 on cross-tenant access
    """
    if obj is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{name} not found")
    require_newsroom_access(user, obj.newsroom_id)
    return obj


async def get_accessible_newsroom(
    newsroom_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
) -> Newsroom:
    """Path dependency: load ``newsroom_id`` and enforce tenancy."""
    require_newsroom_access(current_user, newsroom_id)
    newsroom = await CampaignStorage(db).get_newsroom(newsroom_id)
    if newsroom is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Newsroom not found")
    return newsroom


async def load_newsroom(storage: CampaignStorage, user: User, newsroom_id: int) -> Newsroom:
    """
    Load a newsroom named in a request body and enforce tenancy.

    Raises:
        HTTPException: 403 on cross-tenant access, 404 if missing
    """
    require_newsroom_access(user, newsroom_id)
    newsroom = await storage.get_newsroom(newsroom_id)
    if newsroom is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Newsroom not found")
    return newsroom


async def resolve_stylesheet(
    storage: CampaignStorage, user: User, newsroom_id: int, stylesheet_id: Optional[int]
) -> Optional[BrandStylesheet]:
    """
    The requested stylesheet, or the newsroom's default when none is named.

    Raises:
        HTTPException: 404 if missing, 403 on cross-tenant access, 400 if it
            belongs to another newsroom
    """
    if stylesheet_id is None:
        return await storage.get_default_stylesheet(newsroom_id)
    stylesheet = ensure_owned(await storage.get_brand_stylesheet(stylesheet_id), user, "Stylesheet")
    if stylesheet.newsroom_id != newsroom_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Stylesheet belongs to a different newsroom",
        )
    return stylesheet
