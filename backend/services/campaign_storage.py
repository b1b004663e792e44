"""
Storage layer for newsrooms, stylesheets, campaigns and supporting records.

A thin repository over an ``AsyncSession``. Mutations flush and refresh so
server-side defaults are populated; committing is left to the caller.
"""

import logging
from datetime import datetime
from typing import Any, Optional, TypeVar

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.models import (
    AppLog,
    BrandStylesheet,
    Campaign,
    CampaignEvaluation,
    CampaignPlan,
    CampaignTemplate,
    Newsroom,
    Prompt,
    PromptCategory,
    Segment,
    StorySummary,
    User,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class CampaignStorage:
    """Repository for all CampaignCraft entities."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _save(self, obj: ModelT) -> ModelT:
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def _apply(self, obj: ModelT, changes: dict[str, Any]) -> ModelT:
        for field, value in changes.items():
            setattr(obj, field, value)
        return await self._save(obj)

    async def _get(self, model, obj_id: int):
        return await self.db.get(model, obj_id)

    # ------------------------------------------------------------------
    # Newsrooms
    # ------------------------------------------------------------------

    async def get_newsroom(self, newsroom_id: int) -> Optional[Newsroom]:
        return await self._get(Newsroom, newsroom_id)

    async def get_newsroom_by_slug(self, slug: str) -> Optional[Newsroom]:
        result = await self.db.execute(select(Newsroom).where(Newsroom.slug == slug))
        return result.scalar_one_or_none()

    async def list_newsrooms(self) -> list[Newsroom]:
        result = await self.db.execute(select(Newsroom).order_by(Newsroom.name))
        return list(result.scalars().all())

    async def create_newsroom(self, **fields: Any) -> Newsroom:
        return await self._save(Newsroom(**fields))

    async def update_newsroom(self, newsroom: Newsroom, changes: dict[str, Any]) -> Newsroom:
        return await self._apply(newsroom, changes)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    async def get_user(self, user_id: int) -> Optional[User]:
        return await self._get(User, user_id)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == email.lower())
        )
        return result.scalar_one_or_none()

    async def list_users(self, newsroom_id: Optional[int] = None) -> list[User]:
        stmt = select(User).order_by(User.id)
        if newsroom_id is not None:
            stmt = stmt.where(User.newsroom_id == newsroom_id)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_users_by_newsroom_ids(self, newsroom_ids: list[int]) -> dict[int, list[User]]:
        if not newsroom_ids:
            return {}
        result = await self.db.execute(
            select(User).where(User.newsroom_id.in_(newsroom_ids)).order_by(User.id)
        )
        grouped: dict[int, list[User]] = {}
        for user in result.scalars().all():
            grouped.setdefault(user.newsroom_id, []).append(user)
        return grouped

    async def create_user(self, **fields: Any) -> User:
        fields["email"] = fields["email"].lower()
        return await self._save(User(**fields))

    async def update_user(self, user: User, changes: dict[str, Any]) -> User:
        if "email" in changes and changes["email"]:
            changes["email"] = changes["email"].lower()
        return await self._apply(user, changes)

    # ------------------------------------------------------------------
    # Brand stylesheets
    # ------------------------------------------------------------------

    async def get_brand_stylesheet(self, stylesheet_id: int) -> Optional[BrandStylesheet]:
        return await self._get(BrandStylesheet, stylesheet_id)

    async def get_brand_stylesheets_by_newsroom(self, newsroom_id: int) -> list[BrandStylesheet]:
        result = await self.db.execute(
            select(BrandStylesheet)
            .where(BrandStylesheet.newsroom_id == newsroom_id)
            .order_by(BrandStylesheet.is_default.desc(), BrandStylesheet.id)
        )
        return list(result.scalars().all())

    async def get_default_stylesheet(self, newsroom_id: int) -> Optional[BrandStylesheet]:
        result = await self.db.execute(
            select(BrandStylesheet)
            .where(BrandStylesheet.newsroom_id == newsroom_id)
            .order_by(BrandStylesheet.is_default.desc(), BrandStylesheet.id)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def _clear_default(self, newsroom_id: int, keep_id: Optional[int] = None) -> None:
        stmt = (
            update(BrandStylesheet)
            .where(BrandStylesheet.newsroom_id == newsroom_id, BrandStylesheet.is_default.is_(True))
            .values(is_default=False)
        )
        if keep_id is not None:
            stmt = stmt.where(BrandStylesheet.id != keep_id)
        await self.db.execute(stmt)

    async def create_brand_stylesheet(self, **fields: Any) -> BrandStylesheet:
        # At most one default stylesheet per newsroom
        if fields.get("is_default"):
            await self._clear_default(fields["newsroom_id"])
        return await self._save(BrandStylesheet(**fields))

    async def update_brand_stylesheet(
        self, stylesheet: BrandStylesheet, changes: dict[str, Any]
    ) -> BrandStylesheet:
        if changes.get("is_default"):
            await self._clear_default(stylesheet.newsroom_id, keep_id=stylesheet.id)
        return await self._apply(stylesheet, changes)

    async def delete_brand_stylesheet(self, stylesheet: BrandStylesheet) -> None:
        await self.db.execute(
            update(Campaign)
            .where(Campaign.brand_stylesheet_id == stylesheet.id)
            .values(brand_stylesheet_id=None)
        )
        await self.db.delete(stylesheet)
        await self.db.flush()

    # ------------------------------------------------------------------
    # Campaigns
    # ------------------------------------------------------------------

    async def get_campaign(self, campaign_id: int) -> Optional[Campaign]:
        return await self._get(Campaign, campaign_id)

    async def get_campaigns_by_newsroom(
        self, newsroom_id: int, status: Optional[str] = None
    ) -> list[Campaign]:
        stmt = (
            select(Campaign)
            .where(Campaign.newsroom_id == newsroom_id)
            .order_by(Campaign.created_at.desc(), Campaign.id.desc())
        )
        if status:
            stmt = stmt.where(Campaign.status == status)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_campaigns(self, limit: int = 200) -> list[Campaign]:
        result = await self.db.execute(
            select(Campaign).order_by(Campaign.created_at.desc(), Campaign.id.desc()).limit(limit)
        )
        return list(result.scalars().all())

    async def create_campaign(self, **fields: Any) -> Campaign:
        return await self._save(Campaign(**fields))

    async def update_campaign(self, campaign: Campaign, changes: dict[str, Any]) -> Campaign:
        return await self._apply(campaign, changes)

    async def delete_campaign(self, campaign: Campaign) -> None:
        await self.db.delete(campaign)
        await self.db.flush()

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    async def get_campaign_templates(self) -> list[CampaignTemplate]:
        result = await self.db.execute(
            select(CampaignTemplate)
            .where(CampaignTemplate.is_public.is_(True))
            .order_by(CampaignTemplate.id)
        )
        return list(result.scalars().all())

    async def get_campaign_template(self, template_id: int) -> Optional[CampaignTemplate]:
        return await self._get(CampaignTemplate, template_id)

    async def create_campaign_template(self, **fields: Any) -> CampaignTemplate:
        return await self._save(CampaignTemplate(**fields))

    async def count_campaign_templates(self) -> int:
        result = await self.db.execute(select(func.count(CampaignTemplate.id)))
        return result.scalar_one()

    # ------------------------------------------------------------------
    # Evaluations
    # ------------------------------------------------------------------

    async def create_evaluation(self, **fields: Any) -> CampaignEvaluation:
        return await self._save(CampaignEvaluation(**fields))

    async def get_evaluations_by_newsroom(self, newsroom_id: int) -> list[CampaignEvaluation]:
        result = await self.db.execute(
            select(CampaignEvaluation)
            .where(CampaignEvaluation.newsroom_id == newsroom_id)
            .order_by(CampaignEvaluation.created_at.desc(), CampaignEvaluation.id.desc())
        )
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Campaign plans
    # ------------------------------------------------------------------

    async def get_campaign_plan(self, plan_id: int) -> Optional[CampaignPlan]:
        return await self._get(CampaignPlan, plan_id)

    async def get_campaign_plans_by_newsroom(self, newsroom_id: int) -> list[CampaignPlan]:
        result = await self.db.execute(
            select(CampaignPlan)
            .where(CampaignPlan.newsroom_id == newsroom_id)
            .order_by(CampaignPlan.created_at.desc(), CampaignPlan.id.desc())
        )
        return list(result.scalars().all())

    async def create_campaign_plan(self, **fields: Any) -> CampaignPlan:
        return await self._save(CampaignPlan(**fields))

    async def delete_campaign_plan(self, plan: CampaignPlan) -> None:
        await self.db.delete(plan)
        await self.db.flush()

    # ------------------------------------------------------------------
    # Segments
    # ------------------------------------------------------------------

    async def get_segment(self, segment_id: int) -> Optional[Segment]:
        return await self._get(Segment, segment_id)

    async def get_segments_by_newsroom(self, newsroom_id: int) -> list[Segment]:
        result = await self.db.execute(
            select(Segment).where(Segment.newsroom_id == newsroom_id).order_by(Segment.name)
        )
        return list(result.scalars().all())

    async def create_segment(self, **fields: Any) -> Segment:
        return await self._save(Segment(**fields))

    async def update_segment(self, segment: Segment, changes: dict[str, Any]) -> Segment:
        return await self._apply(segment, changes)

    async def delete_segment(self, segment: Segment) -> None:
        await self.db.delete(segment)
        await self.db.flush()

    # ------------------------------------------------------------------
    # Story summaries
    # ------------------------------------------------------------------

    async def get_story_summary(self, summary_id: int) -> Optional[StorySummary]:
        return await self._get(StorySummary, summary_id)

    async def get_story_summaries_by_newsroom(self, newsroom_id: int) -> list[StorySummary]:
        result = await self.db.execute(
            select(StorySummary)
            .where(StorySummary.newsroom_id == newsroom_id)
            .order_by(StorySummary.created_at.desc(), StorySummary.id.desc())
        )
        return list(result.scalars().all())

    async def create_story_summary(self, **fields: Any) -> StorySummary:
        return await self._save(StorySummary(**fields))

    async def delete_story_summary(self, summary: StorySummary) -> None:
        await self.db.delete(summary)
        await self.db.flush()

    # ------------------------------------------------------------------
    # Prompts
    # ------------------------------------------------------------------

    async def list_prompt_categories(self) -> list[PromptCategory]:
        result = await self.db.execute(select(PromptCategory).order_by(PromptCategory.id))
        return list(result.scalars().all())

    async def get_prompt_category_by_name(self, name: str) -> Optional[PromptCategory]:
        result = await self.db.execute(select(PromptCategory).where(PromptCategory.name == name))
        return result.scalar_one_or_none()

    async def create_prompt_category(self, **fields: Any) -> PromptCategory:
        return await self._save(PromptCategory(**fields))

    async def list_prompts(self, category_id: Optional[int] = None) -> list[Prompt]:
        stmt = select(Prompt).order_by(Prompt.category_id, Prompt.id)
        if category_id is not None:
            stmt = stmt.where(Prompt.category_id == category_id)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_prompt(self, prompt_id: int) -> Optional[Prompt]:
        return await self._get(Prompt, prompt_id)

    async def get_prompt_by_key(self, key: str) -> Optional[Prompt]:
        result = await self.db.execute(select(Prompt).where(Prompt.prompt_key == key))
        return result.scalar_one_or_none()

    async def create_prompt(self, **fields: Any) -> Prompt:
        return await self._save(Prompt(**fields))

    async def update_prompt(self, prompt: Prompt, changes: dict[str, Any]) -> Prompt:
        return await self._apply(prompt, changes)

    # ------------------------------------------------------------------
    # Application logs
    # ------------------------------------------------------------------

    async def create_log(self, **fields: Any) -> AppLog:
        return await self._save(AppLog(**fields))

    async def list_logs(self, level: Optional[str] = None, limit: int = 500) -> list[AppLog]:
        stmt = select(AppLog).order_by(AppLog.created_at.desc(), AppLog.id.desc()).limit(limit)
        if level:
            stmt = stmt.where(AppLog.level == level)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def delete_logs_before(self, cutoff: datetime) -> int:
        result = await self.db.execute(delete(AppLog).where(AppLog.created_at < cutoff))
        return result.rowcount or 0
