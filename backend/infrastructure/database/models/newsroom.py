"""
Newsroom (tenant) and brand stylesheet models.
"""

from typing import Any, Optional

from sqlalchemy import JSON, Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


# Grounding material slots, grouped by category. Each slot holds
# {"text": str, "file_url": str}.
MATERIAL_CATEGORIES: dict[str, tuple[str, ...]] = {
    "brand_foundation": ("brand_voice", "strategy_playbook", "style_guide", "about_us"),
    "campaign_examples": ("past_campaigns", "impact_stories", "testimonials"),
    "audience_intelligence": ("segments", "survey_responses", "local_dates"),
    "performance_data": ("survey_research", "campaign_metrics"),
}


class Newsroom(Base, TimestampMixin):
    """A tenant organization."""

    __tablename__ = "newsrooms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    website: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    logo: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Newsroom(id={self.id}, slug={self.slug})>"


class BrandStylesheet(Base, TimestampMixin):
    """Grounding Library entry: brand voice, guidelines and reference materials."""

    __tablename__ = "brand_stylesheets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    newsroom_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("newsrooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    tone: Mapped[str] = mapped_column(Text, nullable=False)
    voice: Mapped[str] = mapped_column(Text, nullable=False)
    key_messages: Mapped[Optional[list[str]]] = mapped_column(JSON, nullable=True)
    color_palette: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)
    typography: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)
    guidelines: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    materials: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def __repr__(self) -> str:
        return f"<BrandStylesheet(id={self.id}, newsroom_id={self.newsroom_id})>"
