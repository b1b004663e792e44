"""
Prompt template schemas.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from api.schemas.partial import PartialUpdate


class PromptCategoryResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class PromptResponse(BaseModel):
    id: int
    category_id: Optional[int] = None
    name: str
    description: Optional[str] = None
    prompt_key: str
    prompt_text: str
    system_message: Optional[str] = None
    variables: Optional[list[str]] = None
    ai_model: Optional[str] = None
    status: str
    version: str
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PromptUpdate(PartialUpdate):
    non_nullable = ("name", "prompt_text", "status", "version")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    prompt_text: Optional[str] = None
    system_message: Optional[str] = None
    variables: Optional[list[str]] = None
    ai_model: Optional[str] = None
    status: Optional[Literal["active", "inactive"]] = None
    version: Optional[str] = Field(None, max_length=20)
