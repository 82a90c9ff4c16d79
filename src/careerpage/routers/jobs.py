"""Jobs API router - CRUD, publish, bulk action and CSV import endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.orm import Session

from careerpage.database import get_db
from careerpage.errors import ValidationError
from careerpage.models.company import Company
from careerpage.routers.deps import get_owned_company, get_owner_id
from careerpage.schemas.career_page import PublishToggle
from careerpage.schemas.common import ActionResult
from careerpage.schemas.job import (
    BulkJobRequest,
    BulkJobResult,
    CsvImportResult,
    Job,
    JobCreate,
    JobCreated,
    JobUpdate,
)
from careerpage.services.bulk_actions import BulkJobCoordinator
from careerpage.services.csv_import import JobCsvImporter
from careerpage.services.jobs import JobService

router = APIRouter(tags=["jobs"])

# Fields that may be cleared by sending null
NULLABLE_JOB_FIELDS = frozenset(
    {
        "job_slug",
        "job_type",
        "location",
        "team",
        "work_policy",
        "employment_type",
        "experience_level",
        "salary_range",
    }
)


@router.post("/companies/{company_id}/jobs", response_model=JobCreated, status_code=201)
def create_job(
    payload: JobCreate,
    company: Company = Depends(get_owned_company),
    db: Session = Depends(get_db),
) -> JobCreated:
    """Create a draft job."""
    job = JobService(db).create_job(company.id, payload.model_dump(mode="json"))
    return JobCreated(id=job.id)


@router.get("/companies/{company_id}/jobs", response_model=list[Job])
def list_jobs(
    published: bool | None = Query(default=None),
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int | None = Query(default=None, ge=0),
    company: Company = Depends(get_owned_company),
    db: Session = Depends(get_db),
) -> list[Job]:
    """List the company's jobs, newest first, optionally filtered by publish state."""
    jobs = JobService(db).list_jobs(company.id, published=published, limit=limit, offset=offset)
    return [Job.model_validate(j) for j in jobs]


@router.post("/companies/{company_id}/jobs/bulk", response_model=BulkJobResult)
def bulk_job_action(
    payload: BulkJobRequest,
    company: Company = Depends(get_owned_company),
    db: Session = Depends(get_db),
) -> BulkJobResult:
    """
    Publish, unpublish or delete a selection of the company's jobs.

    A failure response means the selected jobs may be partially changed;
    re-fetch the job list.
    """
    outcome = BulkJobCoordinator(db).apply(payload.job_ids, payload.action, company_id=company.id)
    return BulkJobResult(
        action=outcome.action, requested=outcome.requested, affected=outcome.affected
    )


@router.post("/companies/{company_id}/jobs/import", response_model=CsvImportResult)
async def import_jobs_csv(
    file: UploadFile = File(...),
    publish: bool = Form(default=False),
    company: Company = Depends(get_owned_company),
    db: Session = Depends(get_db),
) -> CsvImportResult:
    """Import jobs from an uploaded CSV file."""
    raw = await file.read()
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ValidationError("Invalid CSV", {"file": ["CSV must be UTF-8 encoded"]}) from exc
    result = JobCsvImporter(db).import_csv(company.id, text, publish=publish)
    return CsvImportResult(**result)


@router.get("/jobs/{job_id}", response_model=Job)
def get_job(
    job_id: int,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> Job:
    """Get one of the caller's jobs, draft or published."""
    return Job.model_validate(JobService(db).get_owned(owner_id, job_id))


@router.patch("/jobs/{job_id}", response_model=Job)
def update_job(
    job_id: int,
    payload: JobUpdate,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> Job:
    """Update only the supplied job fields."""
    service = JobService(db)
    job = service.get_owned(owner_id, job_id)
    fields = {
        k: v
        for k, v in payload.model_dump(exclude_unset=True, mode="json").items()
        if v is not None or k in NULLABLE_JOB_FIELDS
    }
    return Job.model_validate(service.update_job(job, fields))


@router.put("/jobs/{job_id}/publish", response_model=Job)
def set_job_published(
    job_id: int,
    payload: PublishToggle,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> Job:
    """Publish or unpublish a single job."""
    service = JobService(db)
    job = service.get_owned(owner_id, job_id)
    return Job.model_validate(service.set_published(job, payload.published))


@router.delete("/jobs/{job_id}", response_model=ActionResult)
def delete_job(
    job_id: int,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> ActionResult:
    """Delete a job and its applications."""
    service = JobService(db)
    service.get_owned(owner_id, job_id)
    service.delete_job(job_id)
    return ActionResult()
