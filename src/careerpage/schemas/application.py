"""Application Pydantic schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ApplicationStatus(str, Enum):
    """Application status enumeration."""

    NEW = "new"
    REVIEWING = "reviewing"
    INTERVIEWING = "interviewing"
    OFFERED = "offered"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


class ApplicationCreate(BaseModel):
    """Schema for a candidate submitting an application."""

    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str | None = None
    linkedin_url: str = Field(min_length=1)
    resume_url: str = Field(min_length=1)


class ApplicationStatusUpdate(BaseModel):
    """Schema for updating an application's status."""

    status: ApplicationStatus


class JobRef(BaseModel):
    """Minimal job reference embedded in application listings."""

    id: int
    title: str


class Application(BaseModel):
    """Complete application schema with database fields."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    job_id: int
    first_name: str
    last_name: str
    email: str | None
    linkedin_url: str
    resume_url: str
    status: ApplicationStatus
    created_at: datetime


class ApplicationWithJob(Application):
    """Application listing row with its job title."""

    job: JobRef


class ApplicationStats(BaseModel):
    """Application counts for a company."""

    total: int
    by_status: dict[str, int]
    by_job: dict[int, int]
