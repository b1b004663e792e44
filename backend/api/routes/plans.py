"""
Campaign planner routes.

A plan is generated once from the planner form and stored as markdown.
Its email sequence is parsed out of the "Phases, dates, and touchplan"
section on every read, so edits to the parser apply to old plans too.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from adapters.ai.campaign_ai_service import campaign_ai_service
from api.deps_newsroom import ensure_owned, get_accessible_newsroom, load_newsroom
from api.middleware.rate_limit import get_rate_limit, limiter
from api.routes.auth import get_current_user
from api.schemas.plan import (
    CampaignPlanCreate,
    CampaignPlanResponse,
    NextEmailRequest,
    NextEmailResponse,
    PlanEmailResponse,
)
from infrastructure.database.connection import get_db
from infrastructure.database.models.newsroom import Newsroom
from infrastructure.database.models.user import User
from services.campaign_plan_parser import (
    format_next_email_suggestion,
    parse_campaign_plan_emails,
    pending_plan_emails,
)
from services.campaign_storage import CampaignStorage
from services.prompt_service import PromptService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Campaign Plans"])


@router.get("/newsrooms/{newsroom_id}/campaign-plans", response_model=list[CampaignPlanResponse])
async def list_campaign_plans(
    newsroom: Annotated[Newsroom, Depends(get_accessible_newsroom)],
    db: AsyncSession = Depends(get_db),
):
    """List a newsroom's plans, newest first."""
    return await CampaignStorage(db).get_campaign_plans_by_newsroom(newsroom.id)


@router.post(
    "/campaign-plans",
    response_model=CampaignPlanResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(get_rate_limit("ai_generation"))
async def create_campaign_plan(
    request: Request,
    body: CampaignPlanCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    """Generate a campaign plan with AI and save it."""
    storage = CampaignStorage(db)
    newsroom = await load_newsroom(storage, current_user, body.newsroom_id)
    inputs = body.inputs.model_dump()

    generated_plan = await campaign_ai_service.generate_campaign_plan(
        title=body.title,
        inputs=inputs,
        newsroom_name=newsroom.name,
        model=body.ai_model,
        prompts=PromptService(db),
    )
    plan = await storage.create_campaign_plan(
        newsroom_id=newsroom.id,
        title=body.title,
        inputs=inputs,
        generated_plan=generated_plan,
        ai_model=body.ai_model,
    )
    await db.commit()

    logger.info(
        "Generated campaign plan %s",
        plan.id,
        extra={"newsroom_id": newsroom.id, "user_id": current_user.id, "model": body.ai_model},
    )
    return plan


@router.get("/campaign-plans/{plan_id}", response_model=CampaignPlanResponse)
async def get_campaign_plan(
    plan_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    return ensure_owned(
        await CampaignStorage(db).get_campaign_plan(plan_id), current_user, "Campaign plan"
    )


@router.post("/campaign-plans/{plan_id}/next-email", response_model=NextEmailResponse)
async def next_campaign_plan_email(
    plan_id: int,
    body: NextEmailRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    """
    Suggest the next email to draft from a plan.

    ``generated`` lists what has been drafted so far; the answer is the
    first planned email not matched by any of it.
    """
    plan = ensure_owned(
        await CampaignStorage(db).get_campaign_plan(plan_id), current_user, "Campaign plan"
    )
    pending = pending_plan_emails(parse_campaign_plan_emails(plan.generated_plan), body.generated)
    if not pending:
        return NextEmailResponse(remaining=0)
    upcoming = pending[0]
    return NextEmailResponse(
        email=PlanEmailResponse(**upcoming.to_dict()),
        suggestion=format_next_email_suggestion(upcoming),
        remaining=len(pending),
    )


@router.delete("/campaign-plans/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_campaign_plan(
    plan_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    storage = CampaignStorage(db)
    plan = ensure_owned(await storage.get_campaign_plan(plan_id), current_user, "Campaign plan")
    await storage.delete_campaign_plan(plan)
    await db.commit()
