"""Tests for the discoverability index, sitemap and jobs feed."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import datetime
from unittest.mock import patch

import pytest
from conftest import make_company, make_job
from sqlalchemy.exc import OperationalError

from careerpage.errors import NotFoundError
from careerpage.schemas.sitemap import ChangeFrequency
from careerpage.services.bulk_actions import BulkJobCoordinator
from careerpage.services.career_pages import CareerPageService
from careerpage.services.discoverability import (
    ATOM_NS,
    SITEMAP_NS,
    DiscoverabilityIndexBuilder,
    career_page_url,
    job_url,
)
from careerpage.services.jobs import JobService

BASE_URL = "https://jobs.example.com"
NOW = datetime(2024, 7, 1, 12, 0, 0)


def builder(db):
    return DiscoverabilityIndexBuilder(db, base_url=BASE_URL, clock=lambda: NOW)


@pytest.fixture
def two_companies(db):
    """
    'acme' has a published page with one published and one draft job.
    'globex' has a draft page with a published job.
    """
    acme, acme_page = make_company(db, "acme", published=True)
    globex, _ = make_company(db, "globex", published=False)
    make_job(db, acme, "Engineer", published=True, job_slug="engineer")
    make_job(db, acme, "Designer", published=False, job_slug="designer")
    make_job(db, globex, "Analyst", published=True, job_slug="analyst")
    return acme, acme_page, globex


class TestUrls:
    """Tests for public URL helpers."""

    def test_career_page_url(self):
        assert career_page_url(BASE_URL, "acme") == f"{BASE_URL}/acme/careers"

    def test_job_url_with_and_without_slug(self, db, company):
        job = make_job(db, company, job_slug="engineer")
        assert job_url(BASE_URL, "acme", job) == f"{BASE_URL}/acme/careers/jobs/engineer"
        job.job_slug = None
        assert job_url(BASE_URL, "acme", job) == f"{BASE_URL}/acme/careers?job={job.id}"


class TestBuild:
    """Tests for DiscoverabilityIndexBuilder.build."""

    def test_empty_store_yields_root_only(self, db):
        entries = builder(db).build()
        assert len(entries) == 1
        root = entries[0]
        assert root.url == BASE_URL
        assert root.priority == 1.0
        assert root.change_frequency is ChangeFrequency.DAILY
        assert root.last_modified == NOW

    def test_published_page_and_job_only(self, db, two_companies):
        _, acme_page, _ = two_companies
        entries = builder(db).build()
        assert [e.url for e in entries] == [
            BASE_URL,
            f"{BASE_URL}/acme/careers",
            f"{BASE_URL}/acme/careers/jobs/engineer",
        ]
        page_entry, job_entry = entries[1], entries[2]
        assert page_entry.priority == 0.8
        assert page_entry.change_frequency is ChangeFrequency.WEEKLY
        assert page_entry.last_modified == acme_page.updated_at
        assert job_entry.priority == 0.6

    def test_job_without_slug_is_omitted(self, db):
        acme, _ = make_company(db, "acme", published=True)
        make_job(db, acme, "Engineer", published=True, job_slug=None)
        assert [e.url for e in builder(db).build()] == [BASE_URL, f"{BASE_URL}/acme/careers"]

    def test_unpublishing_page_hides_its_jobs(self, db, two_companies):
        _, acme_page, _ = two_companies
        acme_page.published = False
        db.commit()
        assert [e.url for e in builder(db).build()] == [BASE_URL]

    def test_companies_most_recently_updated_first(self, db):
        older, _ = make_company(db, "older", published=True)
        newer, _ = make_company(db, "newer", published=True)
        older.updated_at = datetime(2024, 1, 1)
        newer.updated_at = datetime(2024, 6, 1)
        db.commit()
        urls = [e.url for e in builder(db).build()]
        assert urls == [BASE_URL, f"{BASE_URL}/newer/careers", f"{BASE_URL}/older/careers"]

    def test_job_change_moves_company_first(self, db):
        older, _ = make_company(db, "older", published=True)
        newer, _ = make_company(db, "newer", published=True)
        older.updated_at = datetime(2024, 1, 1)
        newer.updated_at = datetime(2024, 6, 1)
        db.commit()

        JobService(db).create_job(older.id, {"title": "Engineer"})

        db.expire_all()
        assert older.updated_at > datetime(2024, 6, 1)
        urls = [e.url for e in builder(db).build()]
        assert urls[1:3] == [f"{BASE_URL}/older/careers", f"{BASE_URL}/newer/careers"]

    def test_page_change_bumps_company(self, db):
        company, page = make_company(db, "acme")
        company.updated_at = datetime(2024, 1, 1)
        db.commit()

        CareerPageService(db).set_published(page, True)

        db.expire_all()
        assert company.updated_at > datetime(2024, 1, 1)

    def test_bulk_change_bumps_company(self, db):
        company, _ = make_company(db, "acme", published=True)
        job = make_job(db, company, "Engineer")
        company.updated_at = datetime(2024, 1, 1)
        db.commit()

        BulkJobCoordinator(db).apply([job.id], "publish", company_id=company.id)

        db.expire_all()
        assert company.updated_at > datetime(2024, 1, 1)

    def test_build_is_reproducible(self, db, two_companies):
        assert builder(db).build() == builder(db).build()

    def test_store_failure_falls_back_to_root(self, db, two_companies):
        index = builder(db)
        with patch.object(db, "execute", side_effect=OperationalError("SELECT", {}, Exception("down"))):
            entries = index.build()
        assert [e.url for e in entries] == [BASE_URL]


class TestRenderSitemap:
    """Tests for sitemap XML rendering."""

    def test_render(self, db, two_companies):
        xml = DiscoverabilityIndexBuilder.render_sitemap(builder(db).build())
        root = ET.fromstring(xml)
        ns = {"sm": SITEMAP_NS}
        locs = [node.text for node in root.findall("sm:url/sm:loc", ns)]
        assert locs[0] == BASE_URL
        assert len(locs) == 3
        first = root.find("sm:url", ns)
        assert first.find("sm:lastmod", ns).text == "2024-07-01T12:00:00Z"
        assert first.find("sm:changefreq", ns).text == "daily"
        assert first.find("sm:priority", ns).text == "1.0"


class TestJobsFeed:
    """Tests for the RSS jobs feed."""

    def test_feed_lists_published_jobs(self, db, two_companies):
        xml = builder(db).render_jobs_feed("acme")
        channel = ET.fromstring(xml).find("channel")
        assert channel.find("title").text == "Careers at Acme"
        assert channel.find(f"{{{ATOM_NS}}}link").get("rel") == "self"
        items = channel.findall("item")
        assert [item.find("title").text for item in items] == ["Engineer"]
        assert items[0].find("link").text == f"{BASE_URL}/acme/careers/jobs/engineer"

    def test_feed_description_is_plain_text(self, db):
        acme, _ = make_company(db, "acme", published=True)
        make_job(db, acme, "Engineer", published=True, description="<p>Build <b>things</b></p>")
        item = ET.fromstring(builder(db).render_jobs_feed("acme")).find("channel/item")
        assert item.find("description").text == "Build things"

    def test_feed_of_draft_page(self, db, two_companies):
        with pytest.raises(NotFoundError):
            builder(db).render_jobs_feed("globex")

    def test_feed_of_unknown_company(self, db):
        with pytest.raises(NotFoundError):
            builder(db).render_jobs_feed("nobody")


class TestSitemapApi:
    """Tests for the sitemap endpoints."""

    def test_sitemap_xml(self, client, db, two_companies, monkeypatch):
        from careerpage.config import settings

        monkeypatch.setattr(settings, "site_url", BASE_URL)
        response = client.get("/sitemap.xml")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/xml")
        assert f"<loc>{BASE_URL}/acme/careers</loc>" in response.text
        assert "globex" not in response.text

    def test_sitemap_json(self, client, db, two_companies, monkeypatch):
        from careerpage.config import settings

        monkeypatch.setattr(settings, "site_url", BASE_URL)
        response = client.get("/sitemap.json")
        assert response.status_code == 200
        data = response.json()
        assert data[0]["url"] == BASE_URL
        assert data[0]["priority"] == 1.0
        assert [e["url"] for e in data[1:]] == [
            f"{BASE_URL}/acme/careers",
            f"{BASE_URL}/acme/careers/jobs/engineer",
        ]
