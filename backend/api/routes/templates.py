"""Campaign template routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.routes.auth import get_current_user
from api.schemas.campaign import CampaignTemplateResponse
from infrastructure.database.connection import get_db
from infrastructure.database.models.user import User
from services.campaign_storage import CampaignStorage

router = APIRouter(prefix="/templates", tags=["Templates"])


@router.get("", response_model=list[CampaignTemplateResponse])
async def list_templates(
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    """List public campaign templates."""
    return await CampaignStorage(db).get_campaign_templates()


@router.get("/{template_id}", response_model=CampaignTemplateResponse)
async def get_template(
    template_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    template = await CampaignStorage(db).get_campaign_template(template_id)
    if template is None or not template.is_public:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
    return template
