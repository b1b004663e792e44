"""
Campaign routes: CRUD plus AI generation, evaluation and rewriting.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from adapters.ai.campaign_ai_service import BrandVoice, CampaignRequest, campaign_ai_service
from api.deps_newsroom import (
    ensure_owned,
    get_accessible_newsroom,
    load_newsroom,
    resolve_stylesheet,
)
from api.middleware.rate_limit import get_rate_limit, limiter
from api.routes.auth import get_current_user
from api.schemas.campaign import (
    CampaignCreate,
    CampaignResponse,
    CampaignUpdate,
    EvaluateCampaignRequest,
    EvaluationResponse,
    GenerateCampaignRequest,
    GenerateCampaignResponse,
    RewriteCampaignRequest,
    RewriteCampaignResponse,
    StatusLiteral,
)
from infrastructure.database.connection import get_db
from infrastructure.database.models.campaign import CampaignStatus
from infrastructure.database.models.newsroom import Newsroom
from infrastructure.database.models.user import User
from services.campaign_storage import CampaignStorage
from services.file_extractor import file_extractor
from services.grounding import build_reference_materials
from services.prompt_service import PromptService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Campaigns"])


async def _segment_descriptions(
    storage: CampaignStorage, newsroom_id: int, segment_ids: list[int]
) -> list[str]:
    lines = []
    for segment_id in segment_ids:
        segment = await storage.get_segment(segment_id)
        if segment is None or segment.newsroom_id != newsroom_id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=f"Segment {segment_id} not found"
            )
        lines.append(f"{segment.name}: {segment.description}" if segment.description else segment.name)
    return lines


async def _story_context(
    storage: CampaignStorage, newsroom_id: int, summary_ids: list[int]
) -> str:
    lines = []
    for summary_id in summary_ids:
        summary = await storage.get_story_summary(summary_id)
        if summary is None or summary.newsroom_id != newsroom_id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Story summary {summary_id} not found",
            )
        lines.append(f"- {summary.title}: {summary.summary}")
    return "Recent coverage to reference:\n" + "\n".join(lines) if lines else ""


# ============================================================================
# CRUD
# ============================================================================


@router.get("/newsrooms/{newsroom_id}/campaigns", response_model=list[CampaignResponse])
async def list_campaigns(
    newsroom: Annotated[Newsroom, Depends(get_accessible_newsroom)],
    status_filter: Optional[StatusLiteral] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
):
    """List a newsroom's campaigns, newest first."""
    return await CampaignStorage(db).get_campaigns_by_newsroom(newsroom.id, status=status_filter)


@router.post(
    "/newsrooms/{newsroom_id}/campaigns",
    response_model=CampaignResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_campaign(
    body: CampaignCreate,
    newsroom: Annotated[Newsroom, Depends(get_accessible_newsroom)],
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    storage = CampaignStorage(db)
    if body.brand_stylesheet_id is not None:
        await resolve_stylesheet(storage, current_user, newsroom.id, body.brand_stylesheet_id)
    campaign = await storage.create_campaign(newsroom_id=newsroom.id, **body.model_dump())
    await db.commit()
    return campaign


@router.get("/campaigns/{campaign_id}", response_model=CampaignResponse)
async def get_campaign(
    campaign_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    return ensure_owned(await CampaignStorage(db).get_campaign(campaign_id), current_user, "Campaign")


@router.put("/campaigns/{campaign_id}", response_model=CampaignResponse)
async def update_campaign(
    campaign_id: int,
    body: CampaignUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    storage = CampaignStorage(db)
    campaign = ensure_owned(await storage.get_campaign(campaign_id), current_user, "Campaign")
    changes = body.model_dump(exclude_unset=True)
    if changes.get("brand_stylesheet_id") is not None:
        await resolve_stylesheet(
            storage, current_user, campaign.newsroom_id, changes["brand_stylesheet_id"]
        )
    campaign = await storage.update_campaign(campaign, changes)
    await db.commit()
    return campaign


@router.delete("/campaigns/{campaign_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_campaign(
    campaign_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    storage = CampaignStorage(db)
    campaign = ensure_owned(await storage.get_campaign(campaign_id), current_user, "Campaign")
    await storage.delete_campaign(campaign)
    await db.commit()
    logger.info("Deleted campaign %s", campaign_id, extra={"user_id": current_user.id})


# ============================================================================
# AI operations
# ============================================================================


@router.post(
    "/campaigns/generate",
    response_model=GenerateCampaignResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(get_rate_limit("ai_generation"))
async def generate_campaign(
    request: Request,
    body: GenerateCampaignRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    """
    Generate campaign copy with AI and save it as a draft.

    The brand voice comes from the requested stylesheet, else the
    newsroom's default one, else a generic newsroom voice. Grounding
    materials, audience segments and story summaries are folded into the
    prompt.
    """
    storage = CampaignStorage(db)
    newsroom = await load_newsroom(storage, current_user, body.newsroom_id)
    stylesheet = await resolve_stylesheet(
        storage, current_user, newsroom.id, body.brand_stylesheet_id
    )
    segments = await _segment_descriptions(storage, newsroom.id, body.segment_ids)
    stories = await _story_context(storage, newsroom.id, body.story_summary_ids)

    campaign_request = CampaignRequest(
        type=body.type,
        objective=body.objective,
        context="\n\n".join(part for part in (body.context, stories) if part),
        newsroom_name=newsroom.name,
        brand=BrandVoice.from_stylesheet(stylesheet),
        reference_materials=await build_reference_materials(stylesheet, file_extractor),
        segments=segments,
    )
    generated = await campaign_ai_service.generate_campaign(
        campaign_request, body.ai_model, PromptService(db)
    )

    campaign = await storage.create_campaign(
        newsroom_id=newsroom.id,
        title=body.title or generated.get("subject") or f"{body.type.title()} campaign",
        type=body.type,
        objective=body.objective,
        context=body.context,
        ai_model=body.ai_model,
        brand_stylesheet_id=stylesheet.id if stylesheet else None,
        status=CampaignStatus.DRAFT.value,
        content=generated,
        metrics=generated.get("metrics"),
    )
    await db.commit()

    logger.info(
        "Generated campaign %s",
        campaign.id,
        extra={"newsroom_id": newsroom.id, "user_id": current_user.id, "model": body.ai_model},
    )
    return {"campaign": campaign, "generated": generated}


@router.post(
    "/campaigns/evaluate",
    response_model=EvaluationResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(get_rate_limit("ai_generation"))
async def evaluate_campaign(
    request: Request,
    body: EvaluateCampaignRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    """Score campaign copy against an evaluation framework and store the result."""
    storage = CampaignStorage(db)
    newsroom = await load_newsroom(storage, current_user, body.newsroom_id)
    if body.campaign_id is not None:
        campaign = ensure_owned(
            await storage.get_campaign(body.campaign_id), current_user, "Campaign"
        )
        if campaign.newsroom_id != newsroom.id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Campaign belongs to a different newsroom",
            )

    result = await campaign_ai_service.evaluate_campaign(
        content=body.campaign_content,
        campaign_type=body.campaign_type,
        framework=body.framework,
        newsroom_name=newsroom.name,
        model=body.ai_model,
        prompts=PromptService(db),
    )
    evaluation = await storage.create_evaluation(
        newsroom_id=newsroom.id,
        campaign_id=body.campaign_id,
        campaign_type=body.campaign_type,
        framework=body.framework,
        content=body.campaign_content,
        overall_score=result["overall_score"],
        category_scores=result["category_scores"],
        recommendations=result["recommendations"],
        ai_model=body.ai_model,
    )
    await db.commit()
    return evaluation


@router.post("/campaigns/ai-rewrite", response_model=RewriteCampaignResponse)
@limiter.limit(get_rate_limit("ai_generation"))
async def rewrite_campaign(
    request: Request,
    body: RewriteCampaignRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    """Rewrite campaign copy so it follows evaluation recommendations."""
    newsroom = await load_newsroom(CampaignStorage(db), current_user, body.newsroom_id)
    rewritten = await campaign_ai_service.rewrite_campaign(
        original_content=body.original_content,
        recommendations=body.recommendations,
        campaign_type=body.campaign_type,
        newsroom_name=newsroom.name,
        model=body.ai_model,
        prompts=PromptService(db),
    )
    return {"rewritten_content": rewritten}


@router.get("/newsrooms/{newsroom_id}/evaluations", response_model=list[EvaluationResponse])
async def list_evaluations(
    newsroom: Annotated[Newsroom, Depends(get_accessible_newsroom)],
    db: AsyncSession = Depends(get_db),
):
    return await CampaignStorage(db).get_evaluations_by_newsroom(newsroom.id)
