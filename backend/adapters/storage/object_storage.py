"""
Object storage adapters for local and S3 storage.

Uploaded grounding documents live under object paths of the form
``/objects/uploads/<object_id>``. Clients upload directly to a presigned
PUT URL (S3) or to the API's local upload endpoint, then reference the
object path in brand stylesheet materials.
"""

import asyncio
import logging
import os
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional
from uuid import uuid4

import aiofiles
import aiohttp
import boto3
from botocore.exceptions import ClientError, NoCredentialsError

from core.exceptions import ObjectNotFoundError, StorageError
from infrastructure.config.settings import settings

logger = logging.getLogger(__name__)

OBJECT_PATH_PREFIX = "/objects/"
_OBJECT_ID_RE = re.compile(r"^[A-Za-z0-9._-]+$")


def new_object_id(filename: Optional[str] = None) -> str:
    """Generate an object id, keeping the file extension for type detection."""
    ext = ""
    if filename:
        ext = os.path.splitext(os.path.basename(filename))[1].lower()
        if not re.match(r"^\.[a-z0-9]{1,8}$", ext):
            ext = ""
    return f"{uuid4().hex}{ext}"


def upload_key(object_id: str) -> str:
    """
    Storage key for an uploaded object.

    Raises:
        ObjectNotFoundError: If the id contains path characters
    """
    if not _OBJECT_ID_RE.match(object_id) or object_id.startswith("."):
        raise ObjectNotFoundError(f"Invalid object id: {object_id}")
    return f"uploads/{object_id}"


def object_key_from_path(object_path: str) -> str:
    """
    Convert ``/objects/uploads/<id>`` (optionally a full URL) to a storage key.

    Raises:
        ObjectNotFoundError: If the path is not an object path
    """
    path = object_path
    if "://" in path:
        path = "/" + path.split("://", 1)[1].split("/", 1)[-1]
    path = path.split("?", 1)[0]
    if not path.startswith(OBJECT_PATH_PREFIX):
        raise ObjectNotFoundError(f"Not an object path: {object_path}")
    key = path[len(OBJECT_PATH_PREFIX):]
    parts = key.split("/")
    if not key or any(p in ("", ".", "..") for p in parts):
        raise ObjectNotFoundError(f"Invalid object path: {object_path}")
    return key


class ObjectStorageAdapter(ABC):
    """Abstract base class for object storage."""

    @abstractmethod
    async def create_upload_url(self, object_id: str, content_type: str) -> str:
        """Return a URL the client can PUT the object bytes to."""

    @abstractmethod
    async def save_object(self, key: str, data: bytes, content_type: str) -> None:
        """Store bytes under ``key``."""

    @abstractmethod
    async def read_object(self, key: str) -> bytes:
        """
        Read the bytes stored under ``key``.

        Raises:
            ObjectNotFoundError: If nothing is stored under the key
        """

    async def read_object_path(self, object_path: str) -> bytes:
        return await self.read_object(object_key_from_path(object_path))


class LocalStorageAdapter(ObjectStorageAdapter):
    """
    Local filesystem storage adapter.

    Structure: <base_path>/uploads/<object_id>
    """

    def __init__(self, base_path: Optional[str] = None, public_api_url: Optional[str] = None):
        self.base_path = Path(base_path or settings.storage_local_path)
        self.public_api_url = (public_api_url or settings.public_api_url).rstrip("/")

    def _file_path(self, key: str) -> Path:
        path = (self.base_path / key).resolve()
        if self.base_path.resolve() not in path.parents:
            raise ObjectNotFoundError(f"Invalid object key: {key}")
        return path

    async def create_upload_url(self, object_id: str, content_type: str) -> str:
        return f"{self.public_api_url}/api/v1/objects/local/{object_id}"

    async def save_object(self, key: str, data: bytes, content_type: str) -> None:
        file_path = self._file_path(key)
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(file_path, "wb") as f:
                await f.write(data)
        except OSError as e:
            logger.error("Failed to save object to local storage: %s", e)
            raise StorageError(f"Failed to save object: {e}")
        logger.info("Saved object to local storage: %s (%d bytes)", key, len(data))

    async def read_object(self, key: str) -> bytes:
        file_path = self._file_path(key)
        if not file_path.is_file():
            raise ObjectNotFoundError(f"Object not found: {key}")
        async with aiofiles.open(file_path, "rb") as f:
            return await f.read()


class S3StorageAdapter(ObjectStorageAdapter):
    """
    AWS S3 storage adapter.

    Objects are private; uploads go through presigned PUT URLs.
    """

    def __init__(
        self,
        bucket: Optional[str] = None,
        region: Optional[str] = None,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
    ):
        self.bucket = bucket or settings.s3_bucket
        self.region = region or settings.s3_region
        access_key = access_key or settings.s3_access_key
        secret_key = secret_key or settings.s3_secret_key

        if access_key and secret_key:
            self.s3_client = boto3.client(
                "s3",
                region_name=self.region,
                aws_access_key_id=access_key,
                aws_secret_access_key=secret_key,
            )
        else:
            # Default credential chain (IAM role, env vars, etc.)
            self.s3_client = boto3.client("s3", region_name=self.region)
        logger.info("S3 storage adapter initialized for bucket: %s", self.bucket)

    def _require_bucket(self) -> str:
        if not self.bucket:
            raise StorageError("S3 bucket not configured.")
        return self.bucket

    async def create_upload_url(self, object_id: str, content_type: str) -> str:
        bucket = self._require_bucket()
        try:
            return self.s3_client.generate_presigned_url(
                "put_object",
                Params={
                    "Bucket": bucket,
                    "Key": upload_key(object_id),
                    "ContentType": content_type,
                },
                ExpiresIn=settings.upload_url_expiry_seconds,
            )
        except (ClientError, NoCredentialsError) as e:
            logger.error("Failed to create presigned upload URL: %s", e)
            raise StorageError(f"Failed to create upload URL: {e}")

    async def save_object(self, key: str, data: bytes, content_type: str) -> None:
        bucket = self._require_bucket()
        try:
            self.s3_client.put_object(Bucket=bucket, Key=key, Body=data, ContentType=content_type)
        except NoCredentialsError:
            logger.error("AWS credentials not found")
            raise StorageError("AWS credentials not configured")
        except ClientError as e:
            logger.error("S3 upload failed: %s", e)
            raise StorageError(f"Failed to upload to S3: {e}")
        logger.info("Uploaded object to S3: %s", key)

    async def read_object(self, key: str) -> bytes:
        bucket = self._require_bucket()
        try:
            response = self.s3_client.get_object(Bucket=bucket, Key=key)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code in ("NoSuchKey", "404"):
                raise ObjectNotFoundError(f"Object not found: {key}")
            logger.error("S3 download failed: %s", e)
            raise StorageError(f"Failed to read from S3: {e}")
        return response["Body"].read()


async def download_page(url: str, max_bytes: int = 5 * 1024 * 1024) -> str:
    """
    Download a web page and return its body as text.

    Raises:
        StorageError: If the download fails or the response is not text
    """
    try:
        async with aiohttp.ClientSession() as session:
            async with session.get(
                url, timeout=aiohttp.ClientTimeout(total=30), allow_redirects=False
            ) as response:
                if response.status != 200:
                    raise StorageError(f"Failed to download page. Status: {response.status}")
                content_type = response.headers.get("content-type", "").lower()
                if content_type and "text" not in content_type and "html" not in content_type:
                    raise StorageError(f"Downloaded content is not text (content-type: {content_type})")
                data = await response.content.read(max_bytes)
                logger.info("Downloaded page from %s (%d bytes)", url, len(data))
                return data.decode(response.charset or "utf-8", errors="ignore")
    except aiohttp.ClientError as e:
        logger.error("Network error downloading %s: %s", url, e)
        raise StorageError(f"Network error: {e}")
    except asyncio.TimeoutError:
        logger.error("Timed out downloading %s", url)
        raise StorageError("Timed out downloading page")


def get_storage_adapter() -> ObjectStorageAdapter:
    """
    Factory function returning the adapter selected by ``settings.storage_type``.

    Raises:
        ValueError: If storage_type is not recognized
    """
    storage_type = settings.storage_type.lower()

    if storage_type == "local":
        return LocalStorageAdapter()
    elif storage_type == "s3":
        return S3StorageAdapter()
    else:
        raise ValueError(
            f"Unknown storage type: {storage_type}. Must be 'local' or 's3'"
        )


# Convenience singleton for quick access
storage_adapter = get_storage_adapter()
