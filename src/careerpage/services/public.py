"""Public read surface: only published content is returned."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from careerpage.errors import NotFoundError
from careerpage.models.career_page import CareerPage
from careerpage.models.company import Company
from careerpage.models.job import Job
from careerpage.models.page_section import PageSection
from careerpage.services.jobs import JobService
from careerpage.services.sections import SectionSequencer


@dataclass
class PublishedPage:
    """A published career page with the content applicants may see."""

    company: Company
    page: CareerPage
    sections: list[PageSection]
    jobs: list[Job]


class PublicSiteService:
    """Resolve public URLs to published pages and jobs."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _published_page(self, company_slug: str) -> tuple[Company, CareerPage]:
        row = self.db.execute(
            select(Company, CareerPage)
            .join(CareerPage, CareerPage.company_id == Company.id)
            .where(Company.slug == company_slug)
        ).first()
        # Draft pages are indistinguishable from missing ones
        if row is None or not row[1].published:
            raise NotFoundError("Career page", company_slug)
        return row[0], row[1]

    def career_page(self, company_slug: str) -> PublishedPage:
        """
        Load a published career page with visible sections and published jobs.

        Raises:
            NotFoundError: If the company is unknown or its page is a draft
        """
        company, page = self._published_page(company_slug)
        sections = [s for s in SectionSequencer(self.db).list(page.id) if s.visible]
        jobs = JobService(self.db).list_jobs(company.id, published=True)
        return PublishedPage(company=company, page=page, sections=sections, jobs=jobs)

    def job(self, company_slug: str, job_slug: str) -> tuple[Company, Job]:
        """
        Load a published job of a published career page.

        Raises:
            NotFoundError: If either the page or the job is not published
        """
        company, _ = self._published_page(company_slug)
        job = self.db.scalars(
            select(Job).where(
                Job.company_id == company.id,
                Job.job_slug == job_slug,
                Job.published.is_(True),
            )
        ).first()
        if job is None:
            raise NotFoundError("Job", job_slug)
        return company, job
