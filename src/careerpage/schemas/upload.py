"""Upload schemas."""

from enum import Enum

from pydantic import BaseModel


class UploadKind(str, Enum):
    """Kind of binary asset being uploaded."""

    IMAGE = "image"
    VIDEO = "video"


class UploadResult(BaseModel):
    """Result of an accepted upload."""

    url: str
