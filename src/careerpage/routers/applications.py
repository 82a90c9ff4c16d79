"""Applications API router - listing, stats and status review endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from careerpage.database import get_db
from careerpage.models.company import Company
from careerpage.routers.deps import get_owned_company
from careerpage.schemas.application import (
    Application,
    ApplicationStats,
    ApplicationStatus,
    ApplicationStatusUpdate,
    ApplicationWithJob,
    JobRef,
)
from careerpage.services.applications import ApplicationService

router = APIRouter(tags=["applications"])


@router.get("/companies/{company_id}/applications", response_model=list[ApplicationWithJob])
def list_applications(
    job_id: int | None = Query(default=None),
    status: ApplicationStatus | None = Query(default=None),
    search: str | None = Query(default=None),
    company: Company = Depends(get_owned_company),
    db: Session = Depends(get_db),
) -> list[ApplicationWithJob]:
    """List applications to the company's jobs, newest first."""
    rows = ApplicationService(db).list_for_company(
        company.id,
        job_id=job_id,
        status=status.value if status else None,
        search=search,
    )
    return [
        ApplicationWithJob(
            **Application.model_validate(app).model_dump(),
            job=JobRef(id=job.id, title=job.title),
        )
        for app, job in rows
    ]


@router.get("/companies/{company_id}/applications/stats", response_model=ApplicationStats)
def application_stats(
    company: Company = Depends(get_owned_company),
    db: Session = Depends(get_db),
) -> ApplicationStats:
    """Count applications by status and by job."""
    return ApplicationStats(**ApplicationService(db).stats(company.id))


@router.patch(
    "/companies/{company_id}/applications/{application_id}/status",
    response_model=Application,
)
def update_application_status(
    application_id: int,
    payload: ApplicationStatusUpdate,
    company: Company = Depends(get_owned_company),
    db: Session = Depends(get_db),
) -> Application:
    """Move an application to a new review status."""
    service = ApplicationService(db)
    application = service.get_for_company(company.id, application_id)
    application = service.update_status(application, payload.status.value)
    return Application.model_validate(application)
