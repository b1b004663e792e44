"""
Prompt template routes.

Any signed-in user can read the templates; only super-admins can edit
them. Editing clears the rendered-prompt cache so changes apply at once.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps_admin import get_current_super_admin_user
from api.routes.auth import get_current_user
from api.schemas.prompt import PromptCategoryResponse, PromptResponse, PromptUpdate
from infrastructure.database.connection import get_db
from infrastructure.database.models.user import User
from services.campaign_storage import CampaignStorage
from services.prompt_service import prompt_cache

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Prompts"])


@router.get("/prompts", response_model=list[PromptResponse])
async def list_prompts(
    current_user: Annotated[User, Depends(get_current_user)],
    category_id: Optional[int] = None,
    db: AsyncSession = Depends(get_db),
):
    return await CampaignStorage(db).list_prompts(category_id=category_id)


@router.get("/prompt-categories", response_model=list[PromptCategoryResponse])
async def list_prompt_categories(
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    return await CampaignStorage(db).list_prompt_categories()


@router.put("/prompts/{prompt_id}", response_model=PromptResponse)
async def update_prompt(
    prompt_id: int,
    body: PromptUpdate,
    admin_user: Annotated[User, Depends(get_current_super_admin_user)],
    db: AsyncSession = Depends(get_db),
):
    storage = CampaignStorage(db)
    prompt = await storage.get_prompt(prompt_id)
    if prompt is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Prompt not found")

    prompt = await storage.update_prompt(prompt, body.model_dump(exclude_unset=True))
    await db.commit()
    prompt_cache.clear()

    logger.info("Prompt %s updated", prompt.prompt_key, extra={"user_id": admin_user.id})
    return prompt
