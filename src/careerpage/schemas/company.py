"""Company Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CompanyBase(BaseModel):
    """Base company schema with common fields."""

    name: str
    slug: str


class CompanyCreate(CompanyBase):
    """
    Schema for creating a new company.

    Fields are accepted as plain strings; the slug validator reports
    field-level problems so no store call happens for malformed input.
    """

    pass


class Company(CompanyBase):
    """Complete company schema with database fields."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: str
    created_at: datetime
    updated_at: datetime


class CompanyCreated(BaseModel):
    """Result of a successful company creation."""

    success: bool = True
    company: Company
    career_page_id: int
