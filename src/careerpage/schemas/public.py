"""Schemas for the public (published-only) read surface."""

from typing import Any

from pydantic import BaseModel

from careerpage.schemas.job import Job
from careerpage.schemas.section import Section


class PublicCompany(BaseModel):
    """Company fields shown to applicants."""

    name: str
    slug: str


class PublicCareerPage(BaseModel):
    """A published career page with its visible sections and published jobs."""

    company: PublicCompany
    theme: dict[str, Any]
    logo_url: str | None
    banner_url: str | None
    video_url: str | None
    sections: list[Section]
    jobs: list[Job]
