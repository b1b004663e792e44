"""
Campaign, template and evaluation schemas.
"""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from api.schemas.partial import PartialUpdate

CampaignTypeLiteral = Literal["email", "social", "web"]
ObjectiveLiteral = Literal["subscription", "donation", "membership", "engagement"]
StatusLiteral = Literal["draft", "active", "completed", "archived"]
FrameworkLiteral = Literal["bluelena", "audience_value_prop"]


class CampaignMetrics(BaseModel):
    estimated_open_rate: float = 25
    estimated_click_rate: float = 4
    estimated_conversion: float = 1


class CampaignContent(BaseModel):
    """Normalized AI output stored on a campaign."""

    subject: Optional[str] = Field(None, max_length=50)
    preview_text: Optional[str] = Field(None, max_length=90)
    content: str = ""
    cta: str = ""
    insights: list[str] = Field(default_factory=list)
    metrics: CampaignMetrics = Field(default_factory=CampaignMetrics)


class CampaignCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)
    type: CampaignTypeLiteral
    objective: ObjectiveLiteral
    context: Optional[str] = None
    ai_model: str = Field(..., min_length=1, max_length=100)
    brand_stylesheet_id: Optional[int] = None
    status: StatusLiteral = "draft"
    content: Optional[dict[str, Any]] = None
    metrics: Optional[dict[str, Any]] = None


class CampaignUpdate(PartialUpdate):
    non_nullable = ("title", "type", "objective", "ai_model", "status")

    title: Optional[str] = Field(None, min_length=1, max_length=500)
    type: Optional[CampaignTypeLiteral] = None
    objective: Optional[ObjectiveLiteral] = None
    context: Optional[str] = None
    ai_model: Optional[str] = Field(None, min_length=1, max_length=100)
    brand_stylesheet_id: Optional[int] = None
    status: Optional[StatusLiteral] = None
    content: Optional[dict[str, Any]] = None
    metrics: Optional[dict[str, Any]] = None


class CampaignResponse(BaseModel):
    id: int
    newsroom_id: int
    title: str
    type: str
    objective: str
    context: Optional[str] = None
    ai_model: str
    brand_stylesheet_id: Optional[int] = None
    status: str
    content: Optional[dict[str, Any]] = None
    metrics: Optional[dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class GenerateCampaignRequest(BaseModel):
    """Body of POST /campaigns/generate."""

    newsroom_id: int
    title: Optional[str] = Field(None, max_length=500)
    type: CampaignTypeLiteral
    objective: ObjectiveLiteral
    context: str = Field(..., min_length=1, max_length=20000)
    ai_model: str = "gpt-4o"
    brand_stylesheet_id: Optional[int] = None
    segment_ids: list[int] = Field(default_factory=list)
    story_summary_ids: list[int] = Field(default_factory=list)


class GenerateCampaignResponse(BaseModel):
    campaign: CampaignResponse
    generated: CampaignContent


class EvaluateCampaignRequest(BaseModel):
    newsroom_id: int
    campaign_content: str = Field(..., min_length=1, max_length=50000)
    campaign_type: CampaignTypeLiteral
    framework: FrameworkLiteral
    campaign_id: Optional[int] = None
    ai_model: str = "gpt-4o"


class EvaluationResponse(BaseModel):
    id: int
    newsroom_id: int
    campaign_id: Optional[int] = None
    campaign_type: str
    framework: str
    overall_score: int
    category_scores: dict[str, int] = Field(default_factory=dict)
    recommendations: list[str] = Field(default_factory=list)
    ai_model: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RewriteCampaignRequest(BaseModel):
    newsroom_id: int
    original_content: str = Field(..., min_length=1, max_length=50000)
    recommendations: list[str] = Field(..., min_length=1)
    campaign_type: CampaignTypeLiteral
    ai_model: str = "gpt-4o"


class RewriteCampaignResponse(BaseModel):
    rewritten_content: str


class CampaignTemplateResponse(BaseModel):
    id: int
    name: str
    description: str
    type: str
    icon: str
    setup_time: str
    template: dict[str, Any]
    is_public: bool

    model_config = ConfigDict(from_attributes=True)
