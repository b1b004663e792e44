"""
Object upload and text extraction routes.

Uploads are two-step: ask for an upload URL, then PUT the raw bytes to it.
With S3 the URL is presigned and bypasses the API; with local storage it
points back at ``PUT /objects/local/{object_id}``.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status

from adapters.storage.object_storage import (
    OBJECT_PATH_PREFIX,
    LocalStorageAdapter,
    new_object_id,
    storage_adapter,
    upload_key,
)
from api.routes.auth import get_current_user
from api.schemas.objects import (
    ExtractTextRequest,
    ExtractTextResponse,
    UploadUrlRequest,
    UploadUrlResponse,
)
from infrastructure.database.models.user import User
from services.file_extractor import file_extractor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/objects", tags=["Objects"])

MAX_UPLOAD_BYTES = 25 * 1024 * 1024


@router.post("/upload", response_model=UploadUrlResponse)
async def create_upload_url(
    body: UploadUrlRequest,
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Return an upload URL and the object path to store in materials."""
    object_id = new_object_id(body.filename)
    upload_url = await storage_adapter.create_upload_url(object_id, body.content_type)
    logger.info("Issued upload URL for %s", object_id, extra={"user_id": current_user.id})
    return {
        "upload_url": upload_url,
        "object_path": f"{OBJECT_PATH_PREFIX}{upload_key(object_id)}",
    }


@router.put("/local/{object_id}", status_code=status.HTTP_204_NO_CONTENT)
async def upload_local_object(
    object_id: str,
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Upload target used when objects are kept on the local filesystem."""
    if not isinstance(storage_adapter, LocalStorageAdapter):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Local uploads are disabled"
        )

    data = await request.body()
    if len(data) > MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="File too large",
        )

    content_type = request.headers.get("content-type", "application/octet-stream")
    await storage_adapter.save_object(upload_key(object_id), data, content_type)


@router.post("/extract", response_model=ExtractTextResponse)
async def extract_text(
    body: ExtractTextRequest,
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Extract readable text from an uploaded document."""
    text = await file_extractor.extract_text_from_file(body.file_url)
    return {"file_url": body.file_url, "text": text}
