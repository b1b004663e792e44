"""Storage adapters for uploaded grounding documents."""

from .object_storage import (
    LocalStorageAdapter,
    ObjectStorageAdapter,
    S3StorageAdapter,
    download_page,
    get_storage_adapter,
    new_object_id,
    object_key_from_path,
    upload_key,
    storage_adapter,
)

__all__ = [
    "ObjectStorageAdapter",
    "LocalStorageAdapter",
    "S3StorageAdapter",
    "get_storage_adapter",
    "download_page",
    "new_object_id",
    "object_key_from_path",
    "upload_key",
    "storage_adapter",
]
