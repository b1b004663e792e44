"""
Newsroom and brand stylesheet (Grounding Library) schemas.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from api.schemas.partial import PartialUpdate


class NewsroomResponse(BaseModel):
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    website: Optional[str] = None
    logo: Optional[str] = None
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MaterialEntry(BaseModel):
    """Free-form text plus an optional uploaded file (object path)."""

    text: str = ""
    file_url: str = ""


class BrandFoundation(BaseModel):
    brand_voice: Optional[MaterialEntry] = None
    strategy_playbook: Optional[MaterialEntry] = None
    style_guide: Optional[MaterialEntry] = None
    about_us: Optional[MaterialEntry] = None


class CampaignExamples(BaseModel):
    past_campaigns: Optional[MaterialEntry] = None
    impact_stories: Optional[MaterialEntry] = None
    testimonials: Optional[MaterialEntry] = None


class AudienceIntelligence(BaseModel):
    segments: Optional[MaterialEntry] = None
    survey_responses: Optional[MaterialEntry] = None
    local_dates: Optional[MaterialEntry] = None


class PerformanceData(BaseModel):
    survey_research: Optional[MaterialEntry] = None
    campaign_metrics: Optional[MaterialEntry] = None


class GroundingMaterials(BaseModel):
    brand_foundation: Optional[BrandFoundation] = None
    campaign_examples: Optional[CampaignExamples] = None
    audience_intelligence: Optional[AudienceIntelligence] = None
    performance_data: Optional[PerformanceData] = None


class BrandStylesheetBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    tone: str = Field(..., min_length=1)
    voice: str = Field(..., min_length=1)
    key_messages: list[str] = Field(default_factory=list)
    color_palette: Optional[dict[str, Any]] = None
    typography: Optional[dict[str, Any]] = None
    guidelines: Optional[str] = None
    materials: Optional[GroundingMaterials] = None
    is_default: bool = False


class BrandStylesheetCreate(BrandStylesheetBase):
    """Create body. ``newsroom_id`` comes from the URL path."""


class BrandStylesheetUpdate(PartialUpdate):
    """Partial update; omitted fields are left unchanged."""

    non_nullable = ("name", "tone", "voice", "is_default")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    tone: Optional[str] = Field(None, min_length=1)
    voice: Optional[str] = Field(None, min_length=1)
    key_messages: Optional[list[str]] = None
    color_palette: Optional[dict[str, Any]] = None
    typography: Optional[dict[str, Any]] = None
    guidelines: Optional[str] = None
    materials: Optional[GroundingMaterials] = None
    is_default: Optional[bool] = None


class BrandStylesheetResponse(BaseModel):
    id: int
    newsroom_id: int
    name: str
    description: Optional[str] = None
    tone: str
    voice: str
    key_messages: Optional[list[str]] = None
    color_palette: Optional[dict[str, Any]] = None
    typography: Optional[dict[str, Any]] = None
    guidelines: Optional[str] = None
    materials: Optional[dict[str, Any]] = None
    is_default: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
