"""Shared fixtures: in-memory database, API client and a fake object store."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from careerpage.database import Base, build_engine, get_db
from careerpage.main import app
from careerpage.models.career_page import CareerPage
from careerpage.models.company import Company
from careerpage.models.job import Job
from careerpage.services.object_store import get_object_store

# ---------------------------------------------------------------------------
# In-memory SQLite test database (shared via StaticPool, foreign keys on)
# ---------------------------------------------------------------------------
engine = build_engine("sqlite://", poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

OWNER = "user-1"
OTHER_OWNER = "user-2"


def override_get_db():
    """Dependency override that uses the test in-memory database."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


class FakeObjectStore:
    """Object store double recording calls instead of writing anywhere."""

    base_url = "https://cdn.test"

    def __init__(self) -> None:
        self.put = AsyncMock(
            side_effect=lambda bucket, key, data, content_type: f"{self.base_url}/{bucket}/{key}"
        )
        self.remove = AsyncMock(return_value=None)

    def key_from_url(self, bucket: str, url: str) -> str | None:
        prefix = f"{self.base_url}/{bucket}/"
        return url[len(prefix):] if url.startswith(prefix) else None


@pytest.fixture(autouse=True)
def setup_db():
    """Create and tear down tables around each test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    """SQLAlchemy session for pre-populating test data."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def object_store():
    return FakeObjectStore()


@pytest.fixture
def client(object_store):
    """TestClient with the DB and object store dependencies overridden."""
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_object_store] = lambda: object_store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def owner_headers():
    return {"X-Owner-Id": OWNER}


@pytest.fixture
def other_headers():
    return {"X-Owner-Id": OTHER_OWNER}


def make_company(db, slug: str = "acme", owner_id: str = OWNER, published: bool = False):
    """Insert a company with its career page and return both."""
    company = Company(name=slug.replace("-", " ").title(), slug=slug, owner_id=owner_id)
    db.add(company)
    db.flush()
    page = CareerPage(company_id=company.id, theme={"primaryColor": "#000000"}, published=published)
    db.add(page)
    db.commit()
    db.refresh(company)
    db.refresh(page)
    return company, page


def make_job(db, company, title: str = "Backend Engineer", published: bool = False, **fields):
    """Insert a job for a company."""
    fields.setdefault("job_slug", title.lower().replace(" ", "-"))
    job = Job(company_id=company.id, title=title, published=published, **fields)
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


@pytest.fixture
def company(db):
    """Draft company 'acme' owned by OWNER."""
    company, _ = make_company(db)
    return company


@pytest.fixture
def page(db, company):
    """Career page of the ``company`` fixture."""
    return db.query(CareerPage).filter(CareerPage.company_id == company.id).one()
