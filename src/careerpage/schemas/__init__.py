"""Pydantic schemas package."""

from careerpage.schemas.application import (
    Application,
    ApplicationCreate,
    ApplicationStats,
    ApplicationStatus,
    ApplicationStatusUpdate,
    ApplicationWithJob,
)
from careerpage.schemas.career_page import CareerPage, CareerPageUpdate, PublishToggle
from careerpage.schemas.common import ActionResult, ErrorResult
from careerpage.schemas.company import Company, CompanyCreate, CompanyCreated
from careerpage.schemas.job import (
    BulkAction,
    BulkJobRequest,
    BulkJobResult,
    CsvImportResult,
    Job,
    JobCreate,
    JobCreated,
    JobType,
    JobUpdate,
)
from careerpage.schemas.public import PublicCareerPage, PublicCompany
from careerpage.schemas.section import (
    Section,
    SectionCreate,
    SectionReorder,
    SectionType,
    SectionUpdate,
)
from careerpage.schemas.sitemap import ChangeFrequency, SitemapEntry
from careerpage.schemas.upload import UploadKind, UploadResult

__all__ = [
    "ActionResult",
    "Application",
    "ApplicationCreate",
    "ApplicationStats",
    "ApplicationStatus",
    "ApplicationStatusUpdate",
    "ApplicationWithJob",
    "BulkAction",
    "BulkJobRequest",
    "BulkJobResult",
    "CareerPage",
    "CareerPageUpdate",
    "ChangeFrequency",
    "Company",
    "CompanyCreate",
    "CompanyCreated",
    "CsvImportResult",
    "ErrorResult",
    "Job",
    "JobCreate",
    "JobCreated",
    "JobType",
    "JobUpdate",
    "PublicCareerPage",
    "PublicCompany",
    "PublishToggle",
    "Section",
    "SectionCreate",
    "SectionReorder",
    "SectionType",
    "SectionUpdate",
    "SitemapEntry",
    "UploadKind",
    "UploadResult",
]
