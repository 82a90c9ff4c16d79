"""Tests for submitting and reviewing applications."""

from __future__ import annotations

import pytest
from conftest import make_company, make_job

from careerpage.errors import NotFoundError
from careerpage.models.application import Application
from careerpage.services.applications import ApplicationService

APPLICANT = {
    "first_name": "Ada",
    "last_name": "Lovelace",
    "email": "ada@example.com",
    "linkedin_url": "https://linkedin.com/in/ada",
    "resume_url": "https://cdn.test/resumes/ada.pdf",
}


@pytest.fixture
def published_job(db):
    company, _ = make_company(db, "acme", published=True)
    return make_job(db, company, "Engineer", published=True)


class TestSubmit:
    """Tests for ApplicationService.submit."""

    def test_submit_to_published_job(self, db, published_job):
        application = ApplicationService(db).submit(published_job.id, APPLICANT)
        assert application.status == "new"
        assert application.job_id == published_job.id

    def test_draft_job_rejects_applications(self, db, company):
        job = make_job(db, company, published=False)
        with pytest.raises(NotFoundError):
            ApplicationService(db).submit(job.id, APPLICANT)

    def test_draft_page_rejects_applications(self, db, company):
        job = make_job(db, company, published=True)
        with pytest.raises(NotFoundError):
            ApplicationService(db).submit(job.id, APPLICANT)
        assert db.query(Application).count() == 0

    def test_unknown_job(self, db):
        with pytest.raises(NotFoundError):
            ApplicationService(db).submit(999, APPLICANT)


class TestApplicationsApi:
    """Tests for the application endpoints."""

    def _apply(self, client, job_id, **overrides):
        return client.post(f"/public/jobs/{job_id}/applications", json={**APPLICANT, **overrides})

    def test_public_submit(self, client, published_job):
        response = self._apply(client, published_job.id)
        assert response.status_code == 201
        assert response.json()["status"] == "new"

    def test_submit_to_draft(self, client, db, company):
        job = make_job(db, company)
        assert self._apply(client, job.id).status_code == 404

    def test_list_filter_and_search(self, client, db, published_job, owner_headers):
        self._apply(client, published_job.id)
        self._apply(client, published_job.id, first_name="Grace", last_name="Hopper", email=None)
        company_id = published_job.company_id

        response = client.get(f"/api/companies/{company_id}/applications", headers=owner_headers)
        assert response.status_code == 200
        data = response.json()
        assert len(data) == 2
        assert data[0]["job"] == {"id": published_job.id, "title": "Engineer"}

        response = client.get(
            f"/api/companies/{company_id}/applications",
            params={"search": "hopper"},
            headers=owner_headers,
        )
        assert [a["first_name"] for a in response.json()] == ["Grace"]

    def test_update_status_and_stats(self, client, published_job, owner_headers):
        application_id = self._apply(client, published_job.id).json()["id"]
        self._apply(client, published_job.id)
        company_id = published_job.company_id

        response = client.patch(
            f"/api/companies/{company_id}/applications/{application_id}/status",
            json={"status": "reviewing"},
            headers=owner_headers,
        )
        assert response.status_code == 200
        assert response.json()["status"] == "reviewing"

        response = client.get(
            f"/api/companies/{company_id}/applications", params={"status": "reviewing"},
            headers=owner_headers,
        )
        assert [a["id"] for a in response.json()] == [application_id]

        stats = client.get(
            f"/api/companies/{company_id}/applications/stats", headers=owner_headers
        ).json()
        assert stats == {
            "total": 2,
            "by_status": {"new": 1, "reviewing": 1},
            "by_job": {str(published_job.id): 2},
        }

    def test_other_company_cannot_review(self, client, db, published_job, other_headers):
        application_id = self._apply(client, published_job.id).json()["id"]
        response = client.patch(
            f"/api/companies/{published_job.company_id}/applications/{application_id}/status",
            json={"status": "rejected"},
            headers=other_headers,
        )
        assert response.status_code == 404
