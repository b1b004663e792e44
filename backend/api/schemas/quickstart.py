"""
Quick-start tool and email optimizer schemas.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

from api.schemas.campaign import CampaignTypeLiteral, ObjectiveLiteral

UrgencyLiteral = Literal["critical", "high", "medium", "low"]
OptimizerContentLiteral = Literal["subject_line", "preheader", "button_text"]

MAX_SEGMENT_VARIANTS = 10


class RapidResponseRequest(BaseModel):
    newsroom_id: int
    headline: str = Field(..., min_length=1, max_length=500)
    urgency: UrgencyLiteral = "high"
    campaign_type: CampaignTypeLiteral = "email"
    objective: ObjectiveLiteral = "engagement"
    brand_stylesheet_id: Optional[int] = None
    ai_model: str = "gpt-4o"


class SegmentVariant(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field("", max_length=2000)


class SegmentRewriteRequest(BaseModel):
    """
    Source campaign plus the segments to adapt it for.

    Segments may be stored ones (``segment_ids``), ad-hoc ones
    (``segments``) or both.
    """

    newsroom_id: int
    campaign_id: int
    segment_ids: list[int] = Field(default_factory=list)
    segments: list[SegmentVariant] = Field(default_factory=list)
    ai_model: str = "gpt-4o"

    @model_validator(mode="after")
    def check_segment_count(self):
        total = len(self.segment_ids) + len(self.segments)
        if total == 0:
            raise ValueError("Provide at least one segment")
        if total > MAX_SEGMENT_VARIANTS:
            raise ValueError(f"At most {MAX_SEGMENT_VARIANTS} segments per request")
        return self


class SuggestionRequest(BaseModel):
    """Body shared by the subject line and button CTA tools."""

    newsroom_id: int
    context: str = Field(..., min_length=1, max_length=20000)
    campaign_type: CampaignTypeLiteral = "email"
    objective: ObjectiveLiteral = "engagement"
    count: int = Field(5, ge=1, le=10)
    brand_stylesheet_id: Optional[int] = None
    ai_model: str = "gpt-4o"


class SubjectLinesResponse(BaseModel):
    subject_lines: list[str]


class CtaButtonsResponse(BaseModel):
    cta_buttons: list[str]


class GroundingLibraryRequest(BaseModel):
    newsroom_id: int
    newsroom_info: str = Field(..., min_length=1, max_length=20000)
    existing_content: Optional[str] = Field(None, max_length=50000)
    ai_model: str = "gpt-4o"


class EmailOptimizerRequest(BaseModel):
    newsroom_id: int
    content_type: OptimizerContentLiteral
    campaign_context: str = Field(..., min_length=10, max_length=20000)
    target_audience: str = Field(..., min_length=5, max_length=2000)
    main_goal: str = Field(..., min_length=5, max_length=2000)
    existing_text: Optional[str] = Field(None, max_length=2000)
    brand_stylesheet_id: Optional[int] = None
    ai_model: str = "gpt-4o"


class OptimizerOption(BaseModel):
    text: str
    reasoning: str = ""
    score: int = Field(..., ge=0, le=100)
    category: str = "general"


class EmailOptimizerResponse(BaseModel):
    content_type: OptimizerContentLiteral
    options: list[OptimizerOption]
