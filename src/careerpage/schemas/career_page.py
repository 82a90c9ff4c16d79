"""Career page Pydantic schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class CareerPageUpdate(BaseModel):
    """Partial update of a career page's presentation fields."""

    theme: dict[str, Any] | None = None
    logo_url: str | None = None
    banner_url: str | None = None
    video_url: str | None = None


class PublishToggle(BaseModel):
    """Schema for flipping the publish flag of a page or a job."""

    published: bool


class CareerPage(BaseModel):
    """Complete career page schema with database fields."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    company_id: int
    theme: dict[str, Any]
    logo_url: str | None
    banner_url: str | None
    video_url: str | None
    published: bool
    created_at: datetime
    updated_at: datetime
