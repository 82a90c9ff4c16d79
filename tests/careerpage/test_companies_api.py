"""Integration tests for the Companies API endpoints."""

from __future__ import annotations

from datetime import datetime

from conftest import OWNER, make_company

from careerpage.models.career_page import CareerPage
from careerpage.models.company import Company
from careerpage.models.job import Job
from careerpage.models.page_section import PageSection


class TestCreateCompany:
    """Tests for POST /api/companies."""

    def test_create_company_with_draft_page(self, client, db, owner_headers):
        response = client.post(
            "/api/companies", json={"name": "Acme", "slug": "acme"}, headers=owner_headers
        )
        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["company"]["slug"] == "acme"
        assert data["company"]["owner_id"] == OWNER

        page = db.query(CareerPage).filter(CareerPage.id == data["career_page_id"]).one()
        assert page.company_id == data["company"]["id"]
        assert page.published is False
        assert page.theme == {"primaryColor": "#000000"}

    def test_invalid_slug_is_rejected_without_write(self, client, db, owner_headers):
        response = client.post(
            "/api/companies", json={"name": "Acme", "slug": "Acme!"}, headers=owner_headers
        )
        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "Invalid data"
        assert "slug" in body["details"]["fields"]
        assert db.query(Company).count() == 0
        assert db.query(CareerPage).count() == 0

    def test_short_name_is_rejected(self, client, owner_headers):
        response = client.post(
            "/api/companies", json={"name": "A", "slug": "acme"}, headers=owner_headers
        )
        assert response.status_code == 422
        assert "name" in response.json()["details"]["fields"]

    def test_duplicate_slug(self, client, db, owner_headers, other_headers):
        first = client.post(
            "/api/companies", json={"name": "Acme", "slug": "acme"}, headers=owner_headers
        )
        assert first.status_code == 201

        second = client.post(
            "/api/companies", json={"name": "Other Acme", "slug": "acme"}, headers=other_headers
        )
        assert second.status_code == 409
        assert second.json() == {
            "error": "Company with this slug already exists",
            "details": {"slug": "acme"},
        }
        assert db.query(Company).count() == 1
        assert db.query(CareerPage).count() == 1

    def test_requires_owner(self, client):
        response = client.post("/api/companies", json={"name": "Acme", "slug": "acme"})
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}


class TestListCompanies:
    """Tests for GET /api/companies."""

    def test_list_newest_first_and_scoped_to_owner(self, client, db, owner_headers):
        older, _ = make_company(db, "older")
        newer, _ = make_company(db, "newer")
        make_company(db, "foreign", owner_id="user-2")
        older.created_at = datetime(2024, 1, 1)
        newer.created_at = datetime(2024, 6, 1)
        db.commit()

        response = client.get("/api/companies", headers=owner_headers)
        assert response.status_code == 200
        assert [c["slug"] for c in response.json()] == ["newer", "older"]

    def test_get_company_of_other_owner_is_not_found(self, client, company, other_headers):
        response = client.get(f"/api/companies/{company.id}", headers=other_headers)
        assert response.status_code == 404

    def test_get_company(self, client, company, owner_headers):
        response = client.get(f"/api/companies/{company.id}", headers=owner_headers)
        assert response.status_code == 200
        assert response.json()["slug"] == "acme"


class TestDeleteCompany:
    """Tests for DELETE /api/companies/{id}."""

    def test_delete_removes_everything(self, client, db, company, page, owner_headers):
        db.add(
            PageSection(career_page_id=page.id, type="about", title="About Us", content="", order=0)
        )
        db.add(Job(company_id=company.id, title="Engineer", job_slug="engineer"))
        db.commit()
        company_id = company.id

        response = client.delete(f"/api/companies/{company_id}", headers=owner_headers)
        assert response.status_code == 200
        assert response.json() == {"success": True}

        db.expire_all()
        assert db.query(Company).count() == 0
        assert db.query(CareerPage).count() == 0
        assert db.query(PageSection).count() == 0
        assert db.query(Job).count() == 0

    def test_delete_removes_page_assets(self, client, db, company, page, owner_headers, object_store):
        page.logo_url = "https://cdn.test/company-logos/abc_1.png"
        page.banner_url = "https://elsewhere.test/banner.png"
        db.commit()

        response = client.delete(f"/api/companies/{company.id}", headers=owner_headers)
        assert response.status_code == 200
        object_store.remove.assert_awaited_once_with("company-logos", "abc_1.png")

    def test_delete_by_other_owner(self, client, db, company, other_headers):
        response = client.delete(f"/api/companies/{company.id}", headers=other_headers)
        assert response.status_code == 404
        db.expire_all()
        assert db.query(Company).count() == 1


class TestCareerPage:
    """Tests for the career page endpoints."""

    def test_get_career_page(self, client, company, page, owner_headers):
        response = client.get(f"/api/companies/{company.id}/career-page", headers=owner_headers)
        assert response.status_code == 200
        assert response.json()["id"] == page.id
        assert response.json()["published"] is False

    def test_update_theme_and_logo(self, client, page, owner_headers):
        response = client.patch(
            f"/api/career-pages/{page.id}",
            json={"theme": {"primaryColor": "#ff0000"}, "logo_url": "https://cdn.test/l.png"},
            headers=owner_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["theme"] == {"primaryColor": "#ff0000"}
        assert data["logo_url"] == "https://cdn.test/l.png"
        assert data["banner_url"] is None

    def test_publish_toggle(self, client, page, owner_headers):
        response = client.put(
            f"/api/career-pages/{page.id}/publish", json={"published": True}, headers=owner_headers
        )
        assert response.status_code == 200
        assert response.json()["published"] is True

        response = client.put(
            f"/api/career-pages/{page.id}/publish", json={"published": False}, headers=owner_headers
        )
        assert response.json()["published"] is False

    def test_unpublish_page_keeps_job_flags(self, client, db, company, page, owner_headers):
        page.published = True
        db.commit()
        job = Job(company_id=company.id, title="Engineer", job_slug="engineer", published=True)
        db.add(job)
        db.commit()

        client.put(
            f"/api/career-pages/{page.id}/publish", json={"published": False}, headers=owner_headers
        )
        db.expire_all()
        assert db.get(Job, job.id).published is True

    def test_page_of_other_owner(self, client, page, other_headers):
        response = client.patch(
            f"/api/career-pages/{page.id}", json={"video_url": "x"}, headers=other_headers
        )
        assert response.status_code == 404
