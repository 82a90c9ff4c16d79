"""Public API router - published career pages, jobs, feeds and the sitemap."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from careerpage.database import get_db
from careerpage.schemas.application import Application, ApplicationCreate
from careerpage.schemas.job import Job
from careerpage.schemas.public import PublicCareerPage, PublicCompany
from careerpage.schemas.section import Section
from careerpage.schemas.sitemap import SitemapEntry
from careerpage.services.applications import ApplicationService
from careerpage.services.discoverability import DiscoverabilityIndexBuilder
from careerpage.services.public import PublicSiteService

router = APIRouter(tags=["public"])


@router.get("/sitemap.xml")
def sitemap_xml(db: Session = Depends(get_db)) -> Response:
    """Sitemap of every published career page and job."""
    builder = DiscoverabilityIndexBuilder(db)
    return Response(
        content=builder.render_sitemap(builder.build()), media_type="application/xml"
    )


@router.get("/sitemap.json", response_model=list[SitemapEntry])
def sitemap_entries(db: Session = Depends(get_db)) -> list[SitemapEntry]:
    """The discoverability index as JSON."""
    return DiscoverabilityIndexBuilder(db).build()


@router.get("/public/{company_slug}", response_model=PublicCareerPage)
def public_career_page(company_slug: str, db: Session = Depends(get_db)) -> PublicCareerPage:
    """
    A published career page with its visible sections and published jobs.

    Raises:
        NotFoundError (404): Unknown company or draft page.
    """
    published = PublicSiteService(db).career_page(company_slug)
    page = published.page
    return PublicCareerPage(
        company=PublicCompany(name=published.company.name, slug=published.company.slug),
        theme=page.theme or {},
        logo_url=page.logo_url,
        banner_url=page.banner_url,
        video_url=page.video_url,
        sections=[Section.model_validate(s) for s in published.sections],
        jobs=[Job.model_validate(j) for j in published.jobs],
    )


@router.get("/public/{company_slug}/jobs/{job_slug}", response_model=Job)
def public_job(company_slug: str, job_slug: str, db: Session = Depends(get_db)) -> Job:
    """A published job of a published career page."""
    _, job = PublicSiteService(db).job(company_slug, job_slug)
    return Job.model_validate(job)


@router.get("/public/{company_slug}/feed.xml")
def public_jobs_feed(company_slug: str, db: Session = Depends(get_db)) -> Response:
    """RSS feed of a published career page's published jobs."""
    feed = DiscoverabilityIndexBuilder(db).render_jobs_feed(company_slug)
    return Response(content=feed, media_type="application/rss+xml")


@router.post("/public/jobs/{job_id}/applications", response_model=Application, status_code=201)
def submit_application(
    job_id: int,
    payload: ApplicationCreate,
    db: Session = Depends(get_db),
) -> Application:
    """Apply to a published job."""
    application = ApplicationService(db).submit(job_id, payload.model_dump())
    return Application.model_validate(application)
