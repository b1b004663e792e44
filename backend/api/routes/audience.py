"""
Audience segment and story summary routes.
"""

import asyncio
import ipaddress
import logging
import socket
from typing import Annotated
from urllib.parse import urlparse

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from adapters.ai.campaign_ai_service import campaign_ai_service
from adapters.storage.object_storage import download_page
from api.deps_newsroom import ensure_owned, get_accessible_newsroom
from api.middleware.rate_limit import get_rate_limit, limiter
from api.routes.auth import get_current_user
from api.schemas.audience import (
    SegmentCreate,
    SegmentResponse,
    SegmentUpdate,
    StorySummaryCreate,
    StorySummaryResponse,
)
from core.exceptions import StorageError
from infrastructure.database.connection import get_db
from infrastructure.database.models.newsroom import Newsroom
from infrastructure.database.models.user import User
from services.campaign_storage import CampaignStorage
from services.file_extractor import html_to_text
from services.prompt_service import PromptService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Audience"])

BLOCKED_HOSTNAMES = {"localhost", "0.0.0.0", "metadata.google.internal"}


async def _resolve_addresses(hostname: str) -> list[str]:
    loop = asyncio.get_running_loop()
    infos = await loop.getaddrinfo(hostname, None, type=socket.SOCK_STREAM)
    return [info[4][0] for info in infos]


def _is_internal_address(address: str) -> bool:
    ip = ipaddress.ip_address(address.split("%", 1)[0])
    return ip.is_private or ip.is_loopback or ip.is_link_local or ip.is_reserved or ip.is_unspecified


async def _validate_story_url(url: str) -> str:
    """
    Reject story URLs that would make the server fetch from internal networks.

    Raises:
        HTTPException: 400 for non-http(s) schemes, local hostnames, or
            hosts that resolve to private, loopback or link-local addresses
    """
    parsed = urlparse(url)
    hostname = (parsed.hostname or "").lower().rstrip(".")
    if parsed.scheme not in ("http", "https") or not hostname:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid story URL")

    if hostname in BLOCKED_HOSTNAMES or hostname.endswith(".localhost"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Story URL cannot point to localhost",
        )

    try:
        addresses = [str(ipaddress.ip_address(hostname))]
    except ValueError:
        try:
            addresses = await _resolve_addresses(hostname)
        except OSError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Could not resolve story host: {hostname}",
            )

    if any(_is_internal_address(address) for address in addresses):
        logger.warning("Blocked story URL pointing at an internal address: %s", url)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Story URL cannot point to a private network",
        )
    return url


# ============================================================================
# Segments
# ============================================================================


@router.get("/newsrooms/{newsroom_id}/segments", response_model=list[SegmentResponse])
async def list_segments(
    newsroom: Annotated[Newsroom, Depends(get_accessible_newsroom)],
    db: AsyncSession = Depends(get_db),
):
    return await CampaignStorage(db).get_segments_by_newsroom(newsroom.id)


@router.post(
    "/newsrooms/{newsroom_id}/segments",
    response_model=SegmentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_segment(
    body: SegmentCreate,
    newsroom: Annotated[Newsroom, Depends(get_accessible_newsroom)],
    db: AsyncSession = Depends(get_db),
):
    segment = await CampaignStorage(db).create_segment(newsroom_id=newsroom.id, **body.model_dump())
    await db.commit()
    return segment


@router.patch("/segments/{segment_id}", response_model=SegmentResponse)
async def update_segment(
    segment_id: int,
    body: SegmentUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    storage = CampaignStorage(db)
    segment = ensure_owned(await storage.get_segment(segment_id), current_user, "Segment")
    segment = await storage.update_segment(segment, body.model_dump(exclude_unset=True))
    await db.commit()
    return segment


@router.delete("/segments/{segment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_segment(
    segment_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    storage = CampaignStorage(db)
    segment = ensure_owned(await storage.get_segment(segment_id), current_user, "Segment")
    await storage.delete_segment(segment)
    await db.commit()


# ============================================================================
# Story summaries
# ============================================================================


@router.get(
    "/newsrooms/{newsroom_id}/story-summaries", response_model=list[StorySummaryResponse]
)
async def list_story_summaries(
    newsroom: Annotated[Newsroom, Depends(get_accessible_newsroom)],
    db: AsyncSession = Depends(get_db),
):
    return await CampaignStorage(db).get_story_summaries_by_newsroom(newsroom.id)


@router.post(
    "/newsrooms/{newsroom_id}/story-summaries",
    response_model=StorySummaryResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(get_rate_limit("ai_generation"))
async def create_story_summary(
    request: Request,
    body: StorySummaryCreate,
    newsroom: Annotated[Newsroom, Depends(get_accessible_newsroom)],
    db: AsyncSession = Depends(get_db),
):
    """
    Store a story summary.

    When no summary is supplied it is written by AI from ``original_text``,
    which is itself fetched from ``original_url`` if absent.
    """
    original_text = body.original_text
    if not original_text and body.original_url:
        await _validate_story_url(body.original_url)
        try:
            original_text = html_to_text(await download_page(body.original_url))
        except StorageError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Could not fetch story: {e.message}",
            )

    summary = body.summary
    if not summary:
        summary = await campaign_ai_service.summarize_story(
            title=body.title,
            original_text=original_text or "",
            newsroom_name=newsroom.name,
            model=body.ai_model,
            prompts=PromptService(db),
        )

    story = await CampaignStorage(db).create_story_summary(
        newsroom_id=newsroom.id,
        title=body.title,
        summary=summary,
        original_text=original_text,
        original_url=body.original_url,
    )
    await db.commit()
    return story


@router.delete("/story-summaries/{summary_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_story_summary(
    summary_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
):
    storage = CampaignStorage(db)
    story = ensure_owned(await storage.get_story_summary(summary_id), current_user, "Story summary")
    await storage.delete_story_summary(story)
    await db.commit()
