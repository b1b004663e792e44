"""
Object upload and text extraction schemas.
"""

from typing import Optional

from pydantic import BaseModel, Field


class UploadUrlRequest(BaseModel):
    filename: Optional[str] = Field(None, max_length=255)
    content_type: str = Field("application/octet-stream", max_length=255)


class UploadUrlResponse(BaseModel):
    upload_url: str
    object_path: str
    method: str = "PUT"


class ExtractTextRequest(BaseModel):
    file_url: str = Field(..., min_length=1, max_length=1000)


class ExtractTextResponse(BaseModel):
    file_url: str
    text: str
