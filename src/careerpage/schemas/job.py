"""Job-related Pydantic schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class JobType(str, Enum):
    """Job type enumeration."""

    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"
    TEMPORARY = "temporary"
    PERMANENT = "permanent"


class BulkAction(str, Enum):
    """Actions the bulk coordinator can apply to a set of jobs."""

    PUBLISH = "publish"
    UNPUBLISH = "unpublish"
    DELETE = "delete"


class JobBase(BaseModel):
    """Base job schema with common fields."""

    title: str = Field(min_length=1)
    description: str = ""
    job_slug: str | None = None
    job_type: JobType | None = None
    location: str | None = None
    team: str | None = None
    work_policy: str | None = None
    employment_type: str | None = None
    experience_level: str | None = None
    salary_range: str | None = None


class JobCreate(JobBase):
    """Schema for creating a new job; jobs always start as drafts."""

    pass


class JobUpdate(BaseModel):
    """Partial job update; only supplied fields are written."""

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    job_slug: str | None = None
    job_type: JobType | None = None
    location: str | None = None
    team: str | None = None
    work_policy: str | None = None
    employment_type: str | None = None
    experience_level: str | None = None
    salary_range: str | None = None


class Job(JobBase):
    """Complete job schema with database fields."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    company_id: int
    job_type: str | None = None
    published: bool
    created_at: datetime
    updated_at: datetime


class JobCreated(BaseModel):
    """Result of a successful job creation."""

    success: bool = True
    id: int


class BulkJobRequest(BaseModel):
    """Schema for a bulk job action."""

    job_ids: list[int]
    action: BulkAction


class BulkJobResult(BaseModel):
    """Batch-level outcome of a bulk job action."""

    success: bool = True
    action: BulkAction
    requested: int
    affected: int


class CsvImportResult(BaseModel):
    """Outcome of a CSV job import."""

    success: bool = True
    imported: int
    total: int
    errors: list[str] | None = None
