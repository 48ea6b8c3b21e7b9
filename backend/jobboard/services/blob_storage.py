"""
Blob Storage Client - public image uploads for job share cards.

Images are PUT to ``{blob_storage_url}/{unique name}`` with the configured
bearer token. The service answers with JSON carrying the public ``url``;
when it does not, the object URL itself is returned.
"""

import logging
import uuid
from typing import Optional

import httpx

from jobboard.config import get_settings
from jobboard.exceptions import BlobStorageError
from jobboard.utils import generate_slug

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 10 * 1024 * 1024


class BlobStorage:
    def __init__(
        self,
        base_url: str,
        token: str = "",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.transport = transport

    def object_name(self, filename: Optional[str]) -> str:
        """Unique object name that keeps the uploaded file's extension."""
        stem, dot, extension = (filename or "image").rpartition(".")
        if not dot:
            stem, extension = extension, ""
        name = f"{generate_slug(stem) or 'image'}-{uuid.uuid4().hex[:12]}"
        return f"{name}.{extension.lower()}" if extension else name

    async def put(self, name: str, data: bytes, content_type: str) -> str:
        """
        Store ``data`` under ``name`` and return its public URL.

        Raises:
            BlobStorageError: upload too large, rejected or failed in transit
        """
        if len(data) > MAX_UPLOAD_BYTES:
            raise BlobStorageError(f"Upload exceeds {MAX_UPLOAD_BYTES} bytes")

        headers = {"Content-Type": content_type}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        object_url = f"{self.base_url}/{name}"

        async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
            try:
                response = await client.put(object_url, content=data, headers=headers)
                response.raise_for_status()
            except httpx.HTTPError as e:
                logger.error(f"Blob upload failed for {name}: {e}")
                raise BlobStorageError(f"Failed to store {name}") from e

        try:
            url = response.json().get("url")
        except ValueError:
            url = None

        logger.info(f"Stored blob {name} ({len(data)} bytes)")
        return url or object_url


def get_blob_storage() -> BlobStorage:
    settings = get_settings()
    return BlobStorage(
        base_url=settings.blob_storage_url,
        token=settings.blob_storage_token,
        timeout=settings.blob_storage_timeout,
    )
