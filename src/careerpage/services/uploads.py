"""Upload gatekeeper: validates binary assets before they reach the object store."""

from __future__ import annotations

import logging
import mimetypes
import re
import secrets
import time
from collections.abc import Callable
from pathlib import PurePosixPath

from careerpage.config import UploadConfig, upload_config
from careerpage.errors import ValidationError
from careerpage.schemas.upload import UploadKind
from careerpage.services.object_store import ObjectStore

logger = logging.getLogger(__name__)

_EXTENSION_RE = re.compile(r"^\.[a-z0-9]{1,10}$")


def _mib(size: int) -> str:
    return f"{size // (1024 * 1024)}MB"


class UploadGatekeeper:
    """
    Service that rejects invalid assets and stores accepted ones.

    Rules:
    - Images must be an allowed image type and at most ``max_image_bytes``.
    - Videos must be mp4, webm or ogg and at most ``max_video_bytes``.
    - The bucket must be one of the configured buckets.
    - Storage keys are ``<random token>_<epoch millis><ext>``; the caller's
      filename only contributes its extension.
    """

    def __init__(
        self,
        store: ObjectStore,
        config: UploadConfig | None = None,
        token_factory: Callable[[], str] = lambda: secrets.token_hex(8),
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize the gatekeeper.

        Args:
            store: Object store accepting validated assets
            config: Upload configuration (uses loaded config if not provided)
            token_factory: Source of the random part of storage keys
            clock: Source of the timestamp part of storage keys
        """
        self.store = store
        self.config = config or upload_config
        self.token_factory = token_factory
        self.clock = clock

    def validate(self, kind: UploadKind | str, content_type: str | None, size: int, bucket: str) -> None:
        """
        Check an asset against the upload rules.

        Args:
            kind: image or video
            content_type: MIME type reported for the file
            size: Size in bytes
            bucket: Target bucket

        Raises:
            ValidationError: With per-field messages for every violated rule
        """
        fields: dict[str, list[str]] = {}
        try:
            kind = UploadKind(kind)
        except ValueError:
            raise ValidationError(
                "Invalid data", {"kind": ["Kind must be one of: image, video"]}
            ) from None

        if bucket not in self.config.allowed_buckets:
            fields["bucket"] = [f"Unknown bucket '{bucket}'"]

        if size <= 0:
            fields["file"] = ["No file uploaded"]
        elif kind is UploadKind.IMAGE:
            if size > self.config.max_image_bytes:
                fields["file"] = [
                    f"File size must be less than {_mib(self.config.max_image_bytes)}"
                ]
            if content_type not in self.config.allowed_image_types:
                fields["content_type"] = [
                    f"Image type must be one of: {', '.join(self.config.allowed_image_types)}"
                ]
        else:
            if content_type not in self.config.allowed_video_types:
                fields["content_type"] = [
                    f"Video type must be one of: {', '.join(self.config.allowed_video_types)}"
                ]
            if size > self.config.max_video_bytes:
                fields["file"] = [
                    f"File size must be less than {_mib(self.config.max_video_bytes)}"
                ]

        if fields:
            raise ValidationError("Invalid upload", fields)

    def storage_key(self, filename: str | None, content_type: str | None = None) -> str:
        """
        Generate a collision-resistant key for an accepted asset.

        Examples:
            >>> gatekeeper.storage_key("My Logo.PNG")
            '9f86d081884c7d65_1718000000000.png'
        """
        ext = PurePosixPath(filename or "").suffix.lower()
        if not _EXTENSION_RE.match(ext):
            ext = (mimetypes.guess_extension(content_type or "") or "").lower()
        return f"{self.token_factory()}_{int(self.clock() * 1000)}{ext}"

    async def upload(
        self,
        filename: str | None,
        content_type: str | None,
        data: bytes,
        kind: UploadKind | str,
        bucket: str,
    ) -> str:
        """
        Validate an asset and hand it to the object store.

        Args:
            filename: Caller-supplied filename (only its extension is kept)
            content_type: MIME type reported for the file
            data: File content
            kind: image or video
            bucket: Target bucket

        Returns:
            Public URL returned by the object store

        Raises:
            ValidationError: If the asset breaks a rule (the store is not called)
            StoreError: If the object store fails
        """
        try:
            self.validate(kind, content_type, len(data), bucket)
        except ValidationError as exc:
            logger.info("Rejected %s upload '%s': %s", kind, filename, exc.fields)
            raise

        key = self.storage_key(filename, content_type)
        url = await self.store.put(bucket, key, data, content_type or "application/octet-stream")
        logger.info("Stored %s upload in %s/%s (%d bytes)", kind, bucket, key, len(data))
        return url
