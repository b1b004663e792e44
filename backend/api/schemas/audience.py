"""
Audience segment and story summary schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from api.schemas.partial import PartialUpdate


class SegmentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


class SegmentUpdate(PartialUpdate):
    non_nullable = ("name",)

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None


class SegmentResponse(BaseModel):
    id: int
    newsroom_id: int
    name: str
    description: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StorySummaryCreate(BaseModel):
    """
    Either ``summary`` is provided directly, or it is generated by AI from
    ``original_text`` (fetched from ``original_url`` when text is absent).
    """

    title: str = Field(..., min_length=1, max_length=500)
    summary: Optional[str] = None
    original_text: Optional[str] = Field(None, max_length=100000)
    original_url: Optional[str] = Field(None, max_length=1000)
    ai_model: str = "gpt-4o"

    @model_validator(mode="after")
    def require_some_source(self):
        if not (self.summary or self.original_text or self.original_url):
            raise ValueError("Provide summary, original_text or original_url")
        return self


class StorySummaryResponse(BaseModel):
    id: int
    newsroom_id: int
    title: str
    summary: str
    original_text: Optional[str] = None
    original_url: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
