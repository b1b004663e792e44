"""
Newsroom and brand stylesheet (Grounding Library) routes.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps_newsroom import ensure_owned, get_accessible_newsroom, require_newsroom_access
from api.routes.auth import get_current_user
from api.schemas.newsroom import (
    BrandStylesheetCreate,
    BrandStylesheetResponse,
    BrandStylesheetUpdate,
    NewsroomResponse,
)
from infrastructure.database.connection import get_db
from infrastructure.database.models.newsroom import Newsroom
from infrastructure.database.models.user import User
from services.campaign_storage import CampaignStorage

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Newsrooms"])


def _stylesheet_fields(body, partial: bool) -> dict:
    fields = body.model_dump(exclude={"materials"}, exclude_unset=partial)
    if body.materials is not None:
        fields["materials"] = body.materials.model_dump(exclude_none=True)
    return fields


@router.get("/newsrooms/{newsroom_id}", response_model=NewsroomResponse)
async def get_newsroom(newsroom: Annotated[Newsroom, Depends(get_accessible_newsroom)]):
    return newsroom


@router.get("/newsrooms/slug/{slug}", response_model=NewsroomResponse)
async def get_newsroom_by_slug(
    slug: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    newsroom = await CampaignStorage(db).get_newsroom_by_slug(slug)
    if newsroom is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Newsroom not found")
    require_newsroom_access(current_user, newsroom.id)
    return newsroom


# ============================================================================
# Brand stylesheets
# ============================================================================


@router.get(
    "/newsrooms/{newsroom_id}/stylesheets", response_model=list[BrandStylesheetResponse]
)
async def list_stylesheets(
    newsroom: Annotated[Newsroom, Depends(get_accessible_newsroom)],
    db: AsyncSession = Depends(get_db),
):
    """List a newsroom's stylesheets, default first."""
    return await CampaignStorage(db).get_brand_stylesheets_by_newsroom(newsroom.id)


@router.post(
    "/newsrooms/{newsroom_id}/stylesheets",
    response_model=BrandStylesheetResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_stylesheet(
    body: BrandStylesheetCreate,
    newsroom: Annotated[Newsroom, Depends(get_accessible_newsroom)],
    db: AsyncSession = Depends(get_db),
):
    """
    Create a brand stylesheet.

    Marking it default clears the flag on the newsroom's other stylesheets.
    """
    stylesheet = await CampaignStorage(db).create_brand_stylesheet(
        newsroom_id=newsroom.id, **_stylesheet_fields(body, partial=False)
    )
    await db.commit()
    logger.info(
        "Created stylesheet %s", stylesheet.id, extra={"newsroom_id": newsroom.id}
    )
    return stylesheet


@router.get("/stylesheets/{stylesheet_id}", response_model=BrandStylesheetResponse)
async def get_stylesheet(
    stylesheet_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    stylesheet = await CampaignStorage(db).get_brand_stylesheet(stylesheet_id)
    return ensure_owned(stylesheet, current_user, "Stylesheet")


@router.put("/stylesheets/{stylesheet_id}", response_model=BrandStylesheetResponse)
async def update_stylesheet(
    stylesheet_id: int,
    body: BrandStylesheetUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    storage = CampaignStorage(db)
    stylesheet = ensure_owned(
        await storage.get_brand_stylesheet(stylesheet_id), current_user, "Stylesheet"
    )
    stylesheet = await storage.update_brand_stylesheet(
        stylesheet, _stylesheet_fields(body, partial=True)
    )
    await db.commit()
    return stylesheet


@router.delete("/stylesheets/{stylesheet_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_stylesheet(
    stylesheet_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    """Delete a stylesheet; campaigns that used it keep running without one."""
    storage = CampaignStorage(db)
    stylesheet = ensure_owned(
        await storage.get_brand_stylesheet(stylesheet_id), current_user, "Stylesheet"
    )
    await storage.delete_brand_stylesheet(stylesheet)
    await db.commit()
