"""Candidate application service."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from careerpage.errors import NotFoundError, StoreError
from careerpage.models.application import Application
from careerpage.models.career_page import CareerPage
from careerpage.models.job import Job

logger = logging.getLogger(__name__)


class ApplicationService:
    """
    Service for submitting and reviewing applications.

    Candidates can only apply to jobs that are publicly discoverable, i.e. the
    job and its company's career page are both published.
    """

    def __init__(self, db: Session) -> None:
        """
        Initialize the application service.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def submit(self, job_id: int, applicant: dict[str, Any]) -> Application:
        """
        Record an application for a published job.

        Args:
            job_id: Job being applied to
            applicant: first_name, last_name, email, linkedin_url, resume_url

        Returns:
            The persisted application

        Raises:
            NotFoundError: If the job is missing or not publicly visible
            StoreError: If the insert fails
        """
        row = self.db.execute(
            select(Job, CareerPage.published)
            .join(CareerPage, CareerPage.company_id == Job.company_id)
            .where(Job.id == job_id)
        ).first()
        if row is None or not (row[0].published and row[1]):
            raise NotFoundError("Job", job_id)

        application = Application(
            job_id=job_id,
            first_name=applicant["first_name"],
            last_name=applicant["last_name"],
            email=applicant.get("email"),
            linkedin_url=applicant["linkedin_url"],
            resume_url=applicant["resume_url"],
            status="new",
        )
        self.db.add(application)
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to store application for job %s", job_id)
            raise StoreError(f"Failed to submit application: {exc}") from exc
        self.db.refresh(application)
        logger.info("Received application %s for job %s", application.id, job_id)
        return application

    def list_for_company(
        self,
        company_id: int,
        job_id: int | None = None,
        status: str | None = None,
        search: str | None = None,
    ) -> list[tuple[Application, Job]]:
        """
        List applications to a company's jobs, newest first.

        Args:
            company_id: Company whose jobs are considered
            job_id: Optional job filter
            status: Optional status filter
            search: Optional case-insensitive match on full name or email

        Returns:
            List of (application, job) pairs
        """
        stmt = (
            select(Application, Job)
            .join(Job, Application.job_id == Job.id)
            .where(Job.company_id == company_id)
            .order_by(Application.created_at.desc(), Application.id.desc())
        )
        if job_id is not None:
            stmt = stmt.where(Application.job_id == job_id)
        if status:
            stmt = stmt.where(Application.status == status)

        try:
            rows = [(app, job) for app, job in self.db.execute(stmt).all()]
        except SQLAlchemyError as exc:
            logger.exception("Failed to list applications for company %s", company_id)
            raise StoreError(f"Failed to list applications: {exc}") from exc

        if search:
            needle = search.lower()
            rows = [
                (app, job)
                for app, job in rows
                if needle in f"{app.first_name} {app.last_name}".lower()
                or needle in (app.email or "").lower()
            ]
        return rows

    def get_for_company(self, company_id: int, application_id: int) -> Application:
        """
        Fetch an application that belongs to one of the company's jobs.

        Raises:
            NotFoundError: If absent or attached to another company's job
        """
        application = self.db.scalars(
            select(Application)
            .join(Job, Application.job_id == Job.id)
            .where(Application.id == application_id, Job.company_id == company_id)
        ).first()
        if application is None:
            raise NotFoundError("Application", application_id)
        return application

    def update_status(self, application: Application, status: str) -> Application:
        """Move an application to a new review status."""
        application.status = status
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to update application %s", application.id)
            raise StoreError(f"Failed to update application: {exc}") from exc
        self.db.refresh(application)
        return application

    def stats(self, company_id: int) -> dict[str, Any]:
        """
        Count applications to a company's jobs.

        Returns:
            Dict with ``total``, ``by_status`` and ``by_job`` counts
        """
        rows = self.db.execute(
            select(Application.status, Application.job_id)
            .join(Job, Application.job_id == Job.id)
            .where(Job.company_id == company_id)
        ).all()
        by_status = Counter(status or "new" for status, _ in rows)
        by_job = Counter(job_id for _, job_id in rows)
        return {"total": len(rows), "by_status": dict(by_status), "by_job": dict(by_job)}
