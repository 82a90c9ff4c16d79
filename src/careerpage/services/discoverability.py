"""Discoverability index: the externally linkable URL set and its renderings."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Callable
from datetime import datetime
from email.utils import format_datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from careerpage.config import settings
from careerpage.errors import NotFoundError
from careerpage.models.career_page import CareerPage
from careerpage.models.company import Company
from careerpage.models.job import Job
from careerpage.schemas.sitemap import ChangeFrequency, SitemapEntry
from careerpage.utils.html_text import html_to_text
from careerpage.utils.timestamps import utcnow

logger = logging.getLogger(__name__)

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
ATOM_NS = "http://www.w3.org/2005/Atom"

ROOT_PRIORITY = 1.0
CAREER_PAGE_PRIORITY = 0.8
JOB_PRIORITY = 0.6


def career_page_url(base_url: str, company_slug: str) -> str:
    """Public URL of a company's career page."""
    return f"{base_url}/{company_slug}/careers"


def job_url(base_url: str, company_slug: str, job: Job) -> str:
    """Public URL of a job; falls back to a query link when the job has no slug."""
    careers = career_page_url(base_url, company_slug)
    if job.job_slug:
        return f"{careers}/jobs/{job.job_slug}"
    return f"{careers}?job={job.id}"


class DiscoverabilityIndexBuilder:
    """
    Derive the externally visible URLs from current publish flags.

    The index is recomputed from row state on every call; nothing is cached.
    A job URL is emitted only when both its career page and the job itself
    are published and the job has a slug.
    """

    def __init__(
        self,
        db: Session,
        base_url: str | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """
        Initialize the builder.

        Args:
            db: SQLAlchemy database session
            base_url: Public site URL (defaults to ``settings.site_url``)
            clock: Source of the generation time
        """
        self.db = db
        self.base_url = (base_url or settings.site_url).rstrip("/")
        self.clock = clock

    def build(self) -> list[SitemapEntry]:
        """
        Build the ordered index.

        Companies are visited most recently updated first, and jobs within a
        company likewise; ties are broken by id so output is reproducible.

        Returns:
            Root entry followed by career page and job entries
        """
        now = self.clock()
        entries = [
            SitemapEntry(
                url=self.base_url,
                last_modified=now,
                change_frequency=ChangeFrequency.DAILY,
                priority=ROOT_PRIORITY,
            )
        ]

        try:
            rows = self.db.execute(
                select(Company, CareerPage)
                .join(CareerPage, CareerPage.company_id == Company.id)
                .order_by(Company.updated_at.desc(), Company.id.asc())
            ).all()
            for company, page in rows:
                if not page.published:
                    continue
                entries.append(
                    SitemapEntry(
                        url=career_page_url(self.base_url, company.slug),
                        last_modified=page.updated_at or now,
                        change_frequency=ChangeFrequency.WEEKLY,
                        priority=CAREER_PAGE_PRIORITY,
                    )
                )
                entries.extend(self._job_entries(company, now))
        except SQLAlchemyError:
            logger.exception("Failed to build discoverability index; emitting root only")
            return entries[:1]

        return entries

    def _job_entries(self, company: Company, now: datetime) -> list[SitemapEntry]:
        jobs = self.db.scalars(
            select(Job)
            .where(Job.company_id == company.id, Job.published.is_(True))
            .order_by(Job.updated_at.desc(), Job.id.asc())
        )
        return [
            SitemapEntry(
                url=job_url(self.base_url, company.slug, job),
                last_modified=job.updated_at or now,
                change_frequency=ChangeFrequency.WEEKLY,
                priority=JOB_PRIORITY,
            )
            for job in jobs
            if job.job_slug
        ]

    @staticmethod
    def render_sitemap(entries: list[SitemapEntry]) -> str:
        """
        Render entries as a sitemaps.org XML document.

        Args:
            entries: Output of ``build()``

        Returns:
            XML text
        """
        urlset = ET.Element("urlset", xmlns=SITEMAP_NS)
        for entry in entries:
            node = ET.SubElement(urlset, "url")
            ET.SubElement(node, "loc").text = entry.url
            ET.SubElement(node, "lastmod").text = entry.last_modified.strftime(
                "%Y-%m-%dT%H:%M:%SZ"
            )
            ET.SubElement(node, "changefreq").text = entry.change_frequency.value
            ET.SubElement(node, "priority").text = f"{entry.priority:.1f}"
        return ET.tostring(urlset, encoding="unicode", xml_declaration=True)

    def render_jobs_feed(self, company_slug: str) -> str:
        """
        Render an RSS 2.0 feed of a company's published jobs.

        Args:
            company_slug: Company whose jobs are listed

        Returns:
            XML text

        Raises:
            NotFoundError: If the company is unknown or its page is a draft
        """
        row = self.db.execute(
            select(Company, CareerPage)
            .join(CareerPage, CareerPage.company_id == Company.id)
            .where(Company.slug == company_slug)
        ).first()
        if row is None or not row[1].published:
            raise NotFoundError("Company", company_slug)
        company = row[0]

        jobs = self.db.scalars(
            select(Job)
            .where(Job.company_id == company.id, Job.published.is_(True))
            .order_by(Job.created_at.desc(), Job.id.desc())
        )

        careers = career_page_url(self.base_url, company.slug)
        now = format_datetime(self.clock(), usegmt=False)

        ET.register_namespace("atom", ATOM_NS)
        rss = ET.Element("rss", version="2.0")
        channel = ET.SubElement(rss, "channel")
        ET.SubElement(channel, "title").text = f"Careers at {company.name}"
        ET.SubElement(channel, "link").text = careers
        ET.SubElement(channel, "description").text = f"Latest job openings at {company.name}"
        ET.SubElement(channel, "language").text = "en-US"
        ET.SubElement(
            channel,
            f"{{{ATOM_NS}}}link",
            href=f"{careers}/feed.xml",
            rel="self",
            type="application/rss+xml",
        )
        ET.SubElement(channel, "lastBuildDate").text = now

        for job in jobs:
            link = job_url(self.base_url, company.slug, job)
            item = ET.SubElement(channel, "item")
            ET.SubElement(item, "title").text = job.title
            ET.SubElement(item, "link").text = link
            ET.SubElement(item, "guid", isPermaLink="true").text = link
            ET.SubElement(item, "description").text = (
                html_to_text(job.description) or f"{job.title} at {company.name}"
            )
            ET.SubElement(item, "pubDate").text = format_datetime(job.created_at)
            for category in (job.location, job.job_type, job.employment_type):
                if category:
                    ET.SubElement(item, "category").text = category

        return ET.tostring(rss, encoding="unicode", xml_declaration=True)
