"""Page section Pydantic schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SectionType(str, Enum):
    """Section type enumeration."""

    ABOUT = "about"
    CULTURE = "culture"
    BENEFITS = "benefits"
    TEAM = "team"
    VALUES = "values"
    CUSTOM = "custom"


class SectionCreate(BaseModel):
    """Schema for appending a section to a page."""

    type: SectionType
    title: str | None = None


class SectionUpdate(BaseModel):
    """Partial section update; only supplied fields are written."""

    title: str | None = None
    content: str | None = None
    order: int | None = Field(default=None, ge=0)
    visible: bool | None = None


class SectionReorder(BaseModel):
    """Section ids listed in their new display order."""

    section_ids: list[int] = Field(min_length=1)


class Section(BaseModel):
    """Complete section schema with database fields."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    career_page_id: int
    type: str
    title: str
    content: str
    order: int
    visible: bool
    created_at: datetime
    updated_at: datetime
