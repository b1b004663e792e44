"""
Campaign planner schemas.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from services.campaign_plan_parser import parse_campaign_plan_emails


class CampaignPlanInputs(BaseModel):
    """Planner form; every field is optional free text."""

    organization_profile: Optional[str] = Field(None, max_length=5000)
    brand_voice: Optional[str] = Field("AP Style", max_length=500)
    campaign_goal: Optional[str] = Field(None, max_length=2000)
    total_goal: Optional[str] = Field(None, max_length=200)
    timeframe_type: Optional[str] = Field("month", max_length=50)
    start_date: Optional[str] = Field(None, max_length=50)
    end_date: Optional[str] = Field(None, max_length=50)
    audience_notes: Optional[str] = Field(None, max_length=5000)
    key_stories: Optional[str] = Field(None, max_length=5000)
    match_details: Optional[str] = Field(None, max_length=2000)
    constraints: Optional[str] = Field(None, max_length=2000)
    tools: Optional[str] = Field(None, max_length=2000)


class CampaignPlanCreate(BaseModel):
    newsroom_id: int
    title: str = Field("Campaign Plan", min_length=1, max_length=500)
    inputs: CampaignPlanInputs = Field(default_factory=CampaignPlanInputs)
    ai_model: str = "gpt-4o"


class PlanEmailResponse(BaseModel):
    date: str
    description: str
    phase: str
    index: int


class CampaignPlanResponse(BaseModel):
    id: int
    newsroom_id: int
    title: str
    inputs: dict[str, Any] = Field(default_factory=dict)
    generated_plan: str
    ai_model: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def emails(self) -> list[PlanEmailResponse]:
        return [
            PlanEmailResponse(**email.to_dict())
            for email in parse_campaign_plan_emails(self.generated_plan)
        ]


class NextEmailRequest(BaseModel):
    """Descriptions or titles of the emails already drafted from the plan."""

    generated: list[str] = Field(default_factory=list, max_length=200)


class NextEmailResponse(BaseModel):
    email: Optional[PlanEmailResponse] = None
    suggestion: Optional[str] = None
    remaining: int
