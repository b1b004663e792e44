"""
Campaign, template and evaluation models.
"""

from enum import Enum
from typing import Any, Optional

from sqlalchemy import JSON, Boolean, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class CampaignType(str, Enum):
    EMAIL = "email"
    SOCIAL = "social"
    WEB = "web"


class CampaignObjective(str, Enum):
    SUBSCRIPTION = "subscription"
    DONATION = "donation"
    MEMBERSHIP = "membership"
    ENGAGEMENT = "engagement"


class CampaignStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class EvaluationFramework(str, Enum):
    BLUELENA = "bluelena"
    AUDIENCE_VALUE_PROP = "audience_value_prop"


class Campaign(Base, TimestampMixin):
    """A generated piece of marketing copy."""

    __tablename__ = "campaigns"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    newsroom_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("newsrooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    objective: Mapped[str] = mapped_column(String(20), nullable=False)
    context: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    ai_model: Mapped[str] = mapped_column(String(100), nullable=False)
    brand_stylesheet_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("brand_stylesheets.id", ondelete="SET NULL"),
        nullable=True,
    )
    status: Mapped[str] = mapped_column(
        String(20), default=CampaignStatus.DRAFT.value, nullable=False
    )
    content: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)
    metrics: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)

    __table_args__ = (
        Index("ix_campaigns_newsroom_created", "newsroom_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Campaign(id={self.id}, type={self.type}, status={self.status})>"


class CampaignTemplate(Base, TimestampMixin):
    """Reusable campaign starting point shown in the template library."""

    __tablename__ = "campaign_templates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    icon: Mapped[str] = mapped_column(String(100), nullable=False)
    setup_time: Mapped[str] = mapped_column(String(50), nullable=False)
    template: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    is_public: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class CampaignEvaluation(Base, TimestampMixin):
    """Scored review of campaign copy against a rubric."""

    __tablename__ = "campaign_evaluations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    newsroom_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("newsrooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    campaign_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("campaigns.id", ondelete="SET NULL"),
        nullable=True,
    )
    campaign_type: Mapped[str] = mapped_column(String(20), nullable=False)
    framework: Mapped[str] = mapped_column(String(50), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    overall_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    category_scores: Mapped[Optional[dict[str, int]]] = mapped_column(JSON, nullable=True)
    recommendations: Mapped[Optional[list[str]]] = mapped_column(JSON, nullable=True)
    ai_model: Mapped[str] = mapped_column(String(100), nullable=False)


class CampaignPlan(Base, TimestampMixin):
    """A multi-week campaign plan written by the model from planner inputs."""

    __tablename__ = "campaign_plans"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    newsroom_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("newsrooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    inputs: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    generated_plan: Mapped[str] = mapped_column(Text, nullable=False)
    ai_model: Mapped[str] = mapped_column(String(100), nullable=False)
