"""Job posting service."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from careerpage.database import is_unique_violation
from careerpage.errors import DuplicateSlugError, NotFoundError, StoreError
from careerpage.models.company import Company
from careerpage.models.job import Job
from careerpage.services.companies import touch_companies
from careerpage.utils.slug import resolve_job_slug
from careerpage.utils.timestamps import utcnow

logger = logging.getLogger(__name__)

JOB_FIELDS = frozenset(
    {
        "title",
        "description",
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


class JobService:
    """
    Service for job CRUD and the per-job publish state.

    New jobs are always drafts; publishing is a direct flip.
    """

    def __init__(self, db: Session) -> None:
        """
        Initialize the job service.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def create_job(self, company_id: int, fields: dict[str, Any]) -> Job:
        """
        Create a draft job for a company.

        Args:
            company_id: Owning company
            fields: Job fields; ``job_slug`` is derived from the title if absent

        Returns:
            The persisted job

        Raises:
            ValidationError: If an explicit job_slug is malformed
            DuplicateSlugError: If the company already has a job with this slug
            StoreError: On any other persistence failure
        """
        data = {k: v for k, v in fields.items() if k in JOB_FIELDS}
        data["job_slug"] = resolve_job_slug(data.get("job_slug"), data.get("title", ""))
        job = Job(company_id=company_id, published=False, **data)
        self.db.add(job)
        self._commit(f"create job for company {company_id}", company_id, data.get("job_slug"))
        self.db.refresh(job)
        logger.info("Created draft job %s for company %s", job.id, company_id)
        return job

    def get(self, job_id: int) -> Job:
        """
        Fetch a job by id.

        Raises:
            NotFoundError: If the job does not exist
        """
        job = self.db.get(Job, job_id)
        if job is None:
            raise NotFoundError("Job", job_id)
        return job

    def get_owned(self, owner_id: str, job_id: int) -> Job:
        """
        Fetch a job whose company the principal owns.

        Raises:
            NotFoundError: If the job is absent or owned by another principal
        """
        row = self.db.execute(
            select(Job, Company.owner_id)
            .join(Company, Job.company_id == Company.id)
            .where(Job.id == job_id)
        ).first()
        if row is None or row[1] != owner_id:
            raise NotFoundError("Job", job_id)
        return row[0]

    def update_job(self, job: Job, fields: dict[str, Any]) -> Job:
        """
        Apply a partial update to a job and stamp ``updated_at``.

        Raises:
            ValidationError: If a supplied job_slug is malformed
            DuplicateSlugError: If the new slug is taken within the company
            StoreError: On any other persistence failure
        """
        data = {k: v for k, v in fields.items() if k in JOB_FIELDS}
        if "job_slug" in data:
            # An empty slug clears it rather than storing "".
            data["job_slug"] = (
                resolve_job_slug(data["job_slug"], job.title) if data["job_slug"] else None
            )
        for key, value in data.items():
            setattr(job, key, value)
        job.updated_at = utcnow()
        self._commit(f"update job {job.id}", job.company_id, data.get("job_slug"))
        self.db.refresh(job)
        return job

    def set_published(self, job: Job, published: bool) -> Job:
        """Flip a job between Draft and Published."""
        job.published = published
        job.updated_at = utcnow()
        self._commit(f"set job {job.id} published={published}", job.company_id)
        self.db.refresh(job)
        logger.info("Job %s is now %s", job.id, "published" if published else "draft")
        return job

    def delete_job(self, job_id: int) -> None:
        """
        Delete a job; its applications are removed by the store cascade.

        Raises:
            StoreError: If the delete fails
        """
        try:
            touch_companies(
                self.db, Company.id.in_(select(Job.company_id).where(Job.id == job_id))
            )
            self.db.execute(delete(Job).where(Job.id == job_id))
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to delete job %s", job_id)
            raise StoreError(f"Failed to delete job: {exc}") from exc

    def list_jobs(
        self,
        company_id: int,
        published: bool | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Job]:
        """
        List a company's jobs, newest first.

        Args:
            company_id: Owning company
            published: Optional publish-state filter
            limit: Optional page size
            offset: Optional number of rows to skip

        Returns:
            List of Job records
        """
        stmt = (
            select(Job)
            .where(Job.company_id == company_id)
            .order_by(Job.created_at.desc(), Job.id.desc())
        )
        if published is not None:
            stmt = stmt.where(Job.published.is_(published))
        if offset:
            stmt = stmt.offset(offset)
        if limit:
            stmt = stmt.limit(limit)
        try:
            return list(self.db.scalars(stmt))
        except SQLAlchemyError as exc:
            logger.exception("Failed to list jobs for company %s", company_id)
            raise StoreError(f"Failed to list jobs: {exc}") from exc

    def _commit(self, action: str, company_id: int, slug: str | None = None) -> None:
        try:
            touch_companies(self.db, Company.id == company_id)
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if is_unique_violation(exc) and slug:
                raise DuplicateSlugError(slug, entity="Job") from exc
            logger.exception("Failed to %s", action)
            raise StoreError(f"Failed to {action}: {exc.orig}") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to %s", action)
            raise StoreError(f"Failed to {action}: {exc}") from exc
