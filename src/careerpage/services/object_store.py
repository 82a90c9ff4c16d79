"""Object store adapters for uploaded binary assets."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol
from urllib.parse import urlparse

import httpx

from careerpage.config import Settings, UploadConfig, settings, upload_config
from careerpage.errors import StoreError

logger = logging.getLogger(__name__)


class ObjectStore(Protocol):
    """Accepts bytes under a bucket/key and hands back a public URL."""

    async def put(self, bucket: str, key: str, data: bytes, content_type: str) -> str:
        ...

    async def remove(self, bucket: str, key: str) -> None:
        ...

    def key_from_url(self, bucket: str, url: str) -> str | None:
        ...


class LocalObjectStore:
    """
    Object store backed by the data directory.

    Objects land under ``<data_root>/uploads/<bucket>/<key>`` and are served
    from ``public_base_url/<bucket>/<key>``.
    """

    def __init__(self, public_base_url: str, root: str = "uploads") -> None:
        """
        Initialize the local store.

        Args:
            public_base_url: URL prefix the uploads directory is served from
            root: Directory (relative to data_root, or absolute) holding buckets
        """
        self.public_base_url = public_base_url.rstrip("/")
        self.root = root

    def path(self, bucket: str, key: str) -> Path:
        """Filesystem location of an object; relative roots live under data_root."""
        root = Path(self.root)
        if not root.is_absolute():
            root = Path(settings.data_root) / root
        return root / bucket / key

    async def put(self, bucket: str, key: str, data: bytes, content_type: str) -> str:
        """Write the object and return its public URL."""
        target = self.path(bucket, key)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise StoreError(f"Failed to store upload: {exc}") from exc
        return f"{self.public_base_url}/{bucket}/{key}"

    async def remove(self, bucket: str, key: str) -> None:
        """Delete the object if present."""
        try:
            self.path(bucket, key).unlink(missing_ok=True)
        except OSError as exc:
            raise StoreError(f"Failed to remove upload: {exc}") from exc

    def key_from_url(self, bucket: str, url: str) -> str | None:
        """Recover the key of an object this store handed out."""
        prefix = f"{self.public_base_url}/{bucket}/"
        if url.startswith(prefix):
            return url[len(prefix):] or None
        return None


class HttpObjectStore:
    """
    Client for an HTTP object storage API.

    Objects are uploaded with ``POST {api_url}/object/{bucket}/{key}`` and are
    publicly readable at ``{api_url}/object/public/{bucket}/{key}``. Uploads are
    not retried: a failed write is reported to the caller as a StoreError.
    """

    def __init__(self, api_url: str, api_key: str | None, config: UploadConfig | None = None) -> None:
        """
        Initialize the HTTP store.

        Args:
            api_url: Storage API base URL
            api_key: Bearer token for the storage API
            config: Upload configuration (timeouts)
        """
        self.api_url = api_url.rstrip("/")
        self.api_key = api_key
        self.config = config or upload_config

    def _headers(self, content_type: str | None = None) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        if content_type:
            headers["Content-Type"] = content_type
        return headers

    def public_url(self, bucket: str, key: str) -> str:
        """Public URL of an object."""
        return f"{self.api_url}/object/public/{bucket}/{key}"

    async def put(self, bucket: str, key: str, data: bytes, content_type: str) -> str:
        """Upload the object and return its public URL."""
        try:
            async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
                response = await client.post(
                    f"{self.api_url}/object/{bucket}/{key}",
                    content=data,
                    headers=self._headers(content_type),
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise StoreError(
                f"Object store rejected upload: HTTP {exc.response.status_code}",
                {"bucket": bucket},
            ) from exc
        except httpx.RequestError as exc:
            raise StoreError(f"Object store unreachable: {exc}", {"bucket": bucket}) from exc
        return self.public_url(bucket, key)

    async def remove(self, bucket: str, key: str) -> None:
        """Delete the object."""
        try:
            async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
                response = await client.delete(
                    f"{self.api_url}/object/{bucket}/{key}", headers=self._headers()
                )
                response.raise_for_status()
        except httpx.HTTPError as exc:
            raise StoreError(f"Failed to remove object: {exc}", {"bucket": bucket}) from exc

    def key_from_url(self, bucket: str, url: str) -> str | None:
        """Recover the key from a public object URL."""
        parts = urlparse(url).path.split("/")
        if bucket in parts:
            key = "/".join(parts[parts.index(bucket) + 1:])
            return key or None
        return None


def build_object_store(config: Settings | None = None) -> ObjectStore:
    """
    Build the object store selected by settings.

    Args:
        config: Application settings (uses global settings if not provided)

    Returns:
        LocalObjectStore or HttpObjectStore
    """
    config = config or settings
    if config.storage_backend == "http":
        if not config.storage_api_url:
            raise ValueError("STORAGE_API_URL must be set when STORAGE_BACKEND=http")
        return HttpObjectStore(config.storage_api_url, config.storage_api_key)
    return LocalObjectStore(config.storage_public_url)


def get_object_store() -> ObjectStore:
    """Dependency function returning the configured object store."""
    return build_object_store()
