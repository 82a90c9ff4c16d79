"""CSV job import."""

from __future__ import annotations

import csv
import io
import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from careerpage.errors import StoreError, ValidationError
from careerpage.models.company import Company
from careerpage.models.job import Job
from careerpage.services.companies import touch_companies
from careerpage.utils.slug import create_slug

logger = logging.getLogger(__name__)

BATCH_SIZE = 100

JOB_TYPE_ALIASES: dict[str, str] = {
    "full-time": "full-time",
    "fulltime": "full-time",
    "full time": "full-time",
    "part-time": "part-time",
    "parttime": "part-time",
    "part time": "part-time",
    "contract": "contract",
    "temporary": "temporary",
    "temp": "temporary",
    "permanent": "permanent",
    "perm": "permanent",
    "internship": "internship",
    "intern": "internship",
}


def normalize_job_type(value: str | None) -> str:
    """
    Map free-form job type text onto a known job type.

    Examples:
        >>> normalize_job_type("Full Time")
        'full-time'
        >>> normalize_job_type("Summer Internship")
        'internship'
        >>> normalize_job_type("")
        'full-time'
    """
    normalized = (value or "").strip().lower()
    if normalized in JOB_TYPE_ALIASES:
        return JOB_TYPE_ALIASES[normalized]
    for marker, job_type in (
        ("temp", "temporary"),
        ("perm", "permanent"),
        ("intern", "internship"),
        ("contract", "contract"),
    ):
        if marker in normalized:
            return job_type
    return "full-time"


def default_description(title: str, department: str | None) -> str:
    """Placeholder description for imported jobs that have none."""
    dept = f" in the {department} department" if department else ""
    return (
        f"Join our team as a {title}{dept}. "
        "We're looking for talented individuals to help us grow."
    )


def parse_jobs_csv(csv_text: str) -> list[dict[str, Any]]:
    """
    Parse CSV text into job field dicts.

    Expected columns: title, work_policy, location, department,
    employment_type, experience_level, job_type, salary_range, job_slug.
    Rows without a title are skipped.

    Raises:
        ValidationError: If the header has no ``title`` column
    """
    reader = csv.DictReader(io.StringIO(csv_text.strip()))
    if not reader.fieldnames or "title" not in [f.strip() for f in reader.fieldnames]:
        raise ValidationError("Invalid CSV", {"file": ["CSV must have a 'title' column"]})

    jobs: list[dict[str, Any]] = []
    for raw in reader:
        row = {(k or "").strip(): (v or "").strip() for k, v in raw.items() if k}
        title = row.get("title")
        if not title:
            continue
        department = row.get("department") or None
        jobs.append(
            {
                "title": title,
                "location": row.get("location", ""),
                "team": department,
                "job_type": normalize_job_type(row.get("job_type")),
                "description": row.get("description") or default_description(title, department),
                "employment_type": row.get("employment_type") or None,
                "experience_level": row.get("experience_level") or None,
                "salary_range": row.get("salary_range") or None,
                "work_policy": row.get("work_policy") or None,
                "job_slug": create_slug(row.get("job_slug") or title) or None,
            }
        )
    return jobs


class JobCsvImporter:
    """
    Import jobs for a company from CSV text.

    Rows are inserted in batches; a failing batch is reported and skipped
    while batches that already committed stay in place.
    """

    def __init__(self, db: Session, batch_size: int = BATCH_SIZE) -> None:
        """
        Initialize the importer.

        Args:
            db: SQLAlchemy database session
            batch_size: Rows per insert transaction
        """
        self.db = db
        self.batch_size = batch_size

    def _dedupe_slugs(self, company_id: int, jobs: list[dict[str, Any]]) -> None:
        taken = set(
            self.db.scalars(
                select(Job.job_slug).where(Job.company_id == company_id, Job.job_slug.is_not(None))
            )
        )
        for job in jobs:
            slug = job["job_slug"]
            if not slug:
                continue
            candidate, n = slug, 2
            while candidate in taken:
                candidate = f"{slug}-{n}"
                n += 1
            job["job_slug"] = candidate
            taken.add(candidate)

    def import_csv(self, company_id: int, csv_text: str, publish: bool = False) -> dict[str, Any]:
        """
        Parse and insert jobs.

        Args:
            company_id: Company receiving the jobs
            csv_text: CSV document
            publish: Whether imported jobs are published immediately

        Returns:
            Dict with ``imported``, ``total`` and ``errors`` (None when clean)

        Raises:
            ValidationError: If the CSV yields no jobs
            StoreError: If every batch failed
        """
        jobs = parse_jobs_csv(csv_text)
        if not jobs:
            raise ValidationError("No valid jobs found in CSV file")
        self._dedupe_slugs(company_id, jobs)

        imported = 0
        errors: list[str] = []
        for start in range(0, len(jobs), self.batch_size):
            batch = jobs[start : start + self.batch_size]
            try:
                self.db.add_all(
                    Job(company_id=company_id, published=publish, **fields) for fields in batch
                )
                touch_companies(self.db, Company.id == company_id)
                self.db.commit()
                imported += len(batch)
            except SQLAlchemyError as exc:
                self.db.rollback()
                logger.warning("CSV import batch at row %d failed: %s", start, exc)
                errors.append(f"Batch error at row {start + 1}: {exc}")

        if errors and imported == 0:
            raise StoreError("Failed to import jobs", {"batches": errors})

        logger.info("Imported %d/%d jobs for company %s", imported, len(jobs), company_id)
        return {"imported": imported, "total": len(jobs), "errors": errors or None}
