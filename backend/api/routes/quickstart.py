"""
Quick-start tools and the email optimizer.

Each tool is a single AI call behind its own prompt key. Rapid-response
and segment rewrites save new draft campaigns, the grounding library
builder saves a new brand stylesheet, and the suggestion tools only
return text.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from adapters.ai.campaign_ai_service import BrandVoice, CampaignRequest, campaign_ai_service
from api.deps_newsroom import ensure_owned, load_newsroom, resolve_stylesheet
from api.middleware.rate_limit import get_rate_limit, limiter
from api.routes.auth import get_current_user
from api.schemas.campaign import CampaignResponse, GenerateCampaignResponse
from api.schemas.newsroom import BrandStylesheetResponse
from api.schemas.quickstart import (
    CtaButtonsResponse,
    EmailOptimizerRequest,
    EmailOptimizerResponse,
    GroundingLibraryRequest,
    RapidResponseRequest,
    SegmentRewriteRequest,
    SubjectLinesResponse,
    SuggestionRequest,
)
from infrastructure.database.connection import get_db
from infrastructure.database.models.campaign import CampaignStatus
from infrastructure.database.models.user import User
from services.campaign_storage import CampaignStorage
from services.prompt_service import PromptService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Quick Start"])


def _campaign_text(content: dict | None) -> str:
    """Flatten stored campaign content back into plain copy for a rewrite prompt."""
    if not content:
        return ""
    parts = []
    if content.get("subject"):
        parts.append(f"Subject: {content['subject']}")
    if content.get("preview_text"):
        parts.append(f"Preview: {content['preview_text']}")
    if content.get("content"):
        parts.append(str(content["content"]))
    if content.get("cta"):
        parts.append(f"Call to action: {content['cta']}")
    return "\n\n".join(parts)


@router.post(
    "/quickstart/rapid-response",
    response_model=GenerateCampaignResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(get_rate_limit("ai_generation"))
async def rapid_response(
    request: Request,
    body: RapidResponseRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    """Write a breaking-news campaign from a headline and save it as a draft."""
    storage = CampaignStorage(db)
    newsroom = await load_newsroom(storage, current_user, body.newsroom_id)
    stylesheet = await resolve_stylesheet(
        storage, current_user, newsroom.id, body.brand_stylesheet_id
    )
    context = f"Breaking news: {body.headline} (urgency: {body.urgency})"
    campaign_request = CampaignRequest(
        type=body.campaign_type,
        objective=body.objective,
        context=context,
        newsroom_name=newsroom.name,
        brand=BrandVoice.from_stylesheet(stylesheet),
    )
    generated = await campaign_ai_service.generate_rapid_response(
        campaign_request, body.headline, body.urgency, body.ai_model, PromptService(db)
    )

    campaign = await storage.create_campaign(
        newsroom_id=newsroom.id,
        title=generated.get("subject") or body.headline[:500],
        type=body.campaign_type,
        objective=body.objective,
        context=context,
        ai_model=body.ai_model,
        brand_stylesheet_id=stylesheet.id if stylesheet else None,
        status=CampaignStatus.DRAFT.value,
        content=generated,
        metrics=generated.get("metrics"),
    )
    await db.commit()

    logger.info(
        "Generated rapid-response campaign %s",
        campaign.id,
        extra={"newsroom_id": newsroom.id, "user_id": current_user.id, "model": body.ai_model},
    )
    return {"campaign": campaign, "generated": generated}


@router.post(
    "/quickstart/rewrite-segments",
    response_model=list[CampaignResponse],
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(get_rate_limit("ai_generation"))
async def rewrite_for_segments(
    request: Request,
    body: SegmentRewriteRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    """
    Adapt an existing campaign for each requested segment.

    Every variant is saved as a new draft titled "<source> (<segment>)".
    Nothing is saved if any AI call fails.
    """
    storage = CampaignStorage(db)
    newsroom = await load_newsroom(storage, current_user, body.newsroom_id)
    source = ensure_owned(await storage.get_campaign(body.campaign_id), current_user, "Campaign")
    if source.newsroom_id != newsroom.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Campaign belongs to a different newsroom",
        )
    original = _campaign_text(source.content)
    if not original:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Campaign has no content to rewrite",
        )

    targets = []
    for segment_id in body.segment_ids:
        segment = await storage.get_segment(segment_id)
        if segment is None or segment.newsroom_id != newsroom.id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=f"Segment {segment_id} not found"
            )
        targets.append((segment.name, segment.description or ""))
    targets.extend((s.name, s.description) for s in body.segments)

    prompts = PromptService(db)
    variants = []
    for name, description in targets:
        generated = await campaign_ai_service.rewrite_for_segment(
            original_content=original,
            campaign_type=source.type,
            newsroom_name=newsroom.name,
            segment_name=name,
            segment_description=description,
            model=body.ai_model,
            prompts=prompts,
        )
        variants.append((name, generated))

    campaigns = []
    for name, generated in variants:
        campaigns.append(
            await storage.create_campaign(
                newsroom_id=newsroom.id,
                title=f"{source.title} ({name})"[:500],
                type=source.type,
                objective=source.objective,
                context=source.context,
                ai_model=body.ai_model,
                brand_stylesheet_id=source.brand_stylesheet_id,
                status=CampaignStatus.DRAFT.value,
                content=generated,
                metrics=generated.get("metrics"),
            )
        )
    await db.commit()
    return campaigns


@router.post("/quickstart/subject-lines", response_model=SubjectLinesResponse)
@limiter.limit(get_rate_limit("ai_generation"))
async def suggest_subject_lines(
    request: Request,
    body: SuggestionRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    storage = CampaignStorage(db)
    newsroom = await load_newsroom(storage, current_user, body.newsroom_id)
    stylesheet = await resolve_stylesheet(
        storage, current_user, newsroom.id, body.brand_stylesheet_id
    )
    lines = await campaign_ai_service.suggest_subject_lines(
        context=body.context,
        campaign_type=body.campaign_type,
        objective=body.objective,
        count=body.count,
        newsroom_name=newsroom.name,
        brand=BrandVoice.from_stylesheet(stylesheet),
        model=body.ai_model,
        prompts=PromptService(db),
    )
    return {"subject_lines": lines}


@router.post("/quickstart/cta-buttons", response_model=CtaButtonsResponse)
@limiter.limit(get_rate_limit("ai_generation"))
async def suggest_cta_buttons(
    request: Request,
    body: SuggestionRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    storage = CampaignStorage(db)
    newsroom = await load_newsroom(storage, current_user, body.newsroom_id)
    stylesheet = await resolve_stylesheet(
        storage, current_user, newsroom.id, body.brand_stylesheet_id
    )
    buttons = await campaign_ai_service.suggest_cta_buttons(
        context=body.context,
        campaign_type=body.campaign_type,
        objective=body.objective,
        count=body.count,
        newsroom_name=newsroom.name,
        brand=BrandVoice.from_stylesheet(stylesheet),
        model=body.ai_model,
        prompts=PromptService(db),
    )
    return {"cta_buttons": buttons}


@router.post(
    "/quickstart/grounding-library",
    response_model=BrandStylesheetResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(get_rate_limit("ai_generation"))
async def build_grounding_library(
    request: Request,
    body: GroundingLibraryRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    """
    Draft brand guidelines with AI and save them as a new stylesheet.

    The stylesheet becomes the newsroom default only when it has none yet.
    """
    storage = CampaignStorage(db)
    newsroom = await load_newsroom(storage, current_user, body.newsroom_id)
    profile = await campaign_ai_service.build_grounding_library(
        newsroom_info=body.newsroom_info,
        existing_content=body.existing_content or "",
        newsroom_name=newsroom.name,
        model=body.ai_model,
        prompts=PromptService(db),
    )
    has_default = await storage.get_default_stylesheet(newsroom.id) is not None

    stylesheet = await storage.create_brand_stylesheet(
        newsroom_id=newsroom.id,
        name=profile["name"] or f"{newsroom.name} brand guidelines",
        description="Drafted by the grounding library builder",
        tone=profile["tone"],
        voice=profile["voice"],
        key_messages=profile["key_messages"],
        guidelines=profile["guidelines"],
        is_default=not has_default,
    )
    await db.commit()
    logger.info(
        "Built grounding library stylesheet %s",
        stylesheet.id,
        extra={"newsroom_id": newsroom.id, "user_id": current_user.id, "model": body.ai_model},
    )
    return stylesheet


@router.post("/email-optimizer/generate", response_model=EmailOptimizerResponse)
@limiter.limit(get_rate_limit("ai_generation"))
async def optimize_email(
    request: Request,
    body: EmailOptimizerRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    """Generate scored subject line, preheader or button text options."""
    storage = CampaignStorage(db)
    newsroom = await load_newsroom(storage, current_user, body.newsroom_id)
    stylesheet = await resolve_stylesheet(
        storage, current_user, newsroom.id, body.brand_stylesheet_id
    )
    options = await campaign_ai_service.optimize_email_content(
        content_type=body.content_type,
        campaign_context=body.campaign_context,
        target_audience=body.target_audience,
        main_goal=body.main_goal,
        existing_text=body.existing_text or "",
        newsroom_name=newsroom.name,
        brand=BrandVoice.from_stylesheet(stylesheet),
        model=body.ai_model,
        prompts=PromptService(db),
    )
    return {"content_type": body.content_type, "options": options}
