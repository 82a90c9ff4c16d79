"""Company lifecycle service."""

from __future__ import annotations

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from careerpage.database import is_unique_violation
from careerpage.errors import DuplicateSlugError, NotFoundError, StoreError
from careerpage.models.career_page import CareerPage, default_theme
from careerpage.models.company import Company
from careerpage.models.job import Job
from careerpage.models.page_section import PageSection
from careerpage.utils.slug import validate_company_input
from careerpage.utils.timestamps import utcnow

logger = logging.getLogger(__name__)


def touch_companies(db: Session, *conditions) -> None:
    """
    Stamp ``updated_at`` on the companies matching ``conditions``.

    Called when a company's page or jobs change so the discoverability index
    lists recently changed companies first. Runs inside the caller's
    transaction; the caller commits.
    """
    db.execute(
        update(Company)
        .where(*conditions)
        .values(updated_at=utcnow())
        .execution_options(synchronize_session=False)
    )


class CompanyService:
    """
    Service for creating, listing and deleting companies.

    A company and its career page are written in one transaction, so the
    1:1 company/page invariant holds from the moment the company exists.
    """

    def __init__(self, db: Session) -> None:
        """
        Initialize the company service.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def create_company(self, owner_id: str, name: str, slug: str) -> tuple[Company, CareerPage]:
        """
        Create a company together with its draft career page.

        Args:
            owner_id: Authenticated principal id
            name: Company display name
            slug: Proposed company slug

        Returns:
            Tuple of (company, career_page)

        Raises:
            ValidationError: If name or slug are malformed (no store call made)
            DuplicateSlugError: If the slug is already taken
            StoreError: On any other persistence failure
        """
        name, slug = validate_company_input(name, slug)

        company = Company(name=name, slug=slug, owner_id=owner_id)
        try:
            self.db.add(company)
            self.db.flush()
            page = CareerPage(company_id=company.id, theme=default_theme(), published=False)
            self.db.add(page)
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if is_unique_violation(exc) and "slug" in str(exc.orig).lower():
                logger.info("Company slug '%s' already taken", slug)
                raise DuplicateSlugError(slug) from exc
            logger.exception("Failed to create company '%s'", slug)
            raise StoreError(f"Failed to create company: {exc.orig}") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to create company '%s'", slug)
            raise StoreError(f"Failed to create company: {exc}") from exc

        self.db.refresh(company)
        self.db.refresh(page)
        logger.info("Created company %s ('%s') with career page %s", company.id, slug, page.id)
        return company, page

    def list_companies(self, owner_id: str) -> list[Company]:
        """
        List the companies owned by a principal, most recently created first.

        Args:
            owner_id: Authenticated principal id

        Returns:
            List of Company records
        """
        stmt = (
            select(Company)
            .where(Company.owner_id == owner_id)
            .order_by(Company.created_at.desc(), Company.id.desc())
        )
        try:
            return list(self.db.scalars(stmt))
        except SQLAlchemyError as exc:
            logger.exception("Failed to list companies for owner %s", owner_id)
            raise StoreError(f"Failed to list companies: {exc}") from exc

    def get_by_slug(self, slug: str) -> Company:
        """
        Fetch a company by slug.

        Raises:
            NotFoundError: If no company has this slug
        """
        company = self.db.scalars(select(Company).where(Company.slug == slug)).first()
        if company is None:
            raise NotFoundError("Company", slug)
        return company

    def get_owned(self, owner_id: str, company_id: int) -> Company:
        """
        Fetch a company the principal owns.

        Companies owned by someone else are reported as missing.

        Raises:
            NotFoundError: If the company is absent or owned by another principal
        """
        company = self.db.get(Company, company_id)
        if company is None or company.owner_id != owner_id:
            raise NotFoundError("Company", company_id)
        return company

    def delete_company(self, owner_id: str, company_id: int) -> list[str]:
        """
        Delete a company with its sections, jobs and career page.

        Children are removed explicitly in dependency order inside a single
        transaction, so the result does not depend on the store's cascade
        settings.

        Args:
            owner_id: Authenticated principal id
            company_id: Company to delete

        Returns:
            Public URLs of assets (logo, banner) the page referenced, for
            best-effort removal from the object store by the caller

        Raises:
            NotFoundError: If the company is absent or not owned by the caller
            StoreError: If any delete statement fails
        """
        company = self.get_owned(owner_id, company_id)
        page = self.db.scalars(
            select(CareerPage).where(CareerPage.company_id == company.id)
        ).first()
        asset_urls = [url for url in (page.logo_url, page.banner_url) if url] if page else []

        try:
            if page is not None:
                self.db.execute(
                    delete(PageSection).where(PageSection.career_page_id == page.id)
                )
            self.db.execute(delete(Job).where(Job.company_id == company.id))
            if page is not None:
                self.db.execute(delete(CareerPage).where(CareerPage.id == page.id))
            result = self.db.execute(
                delete(Company).where(Company.id == company.id, Company.owner_id == owner_id)
            )
            if result.rowcount == 0:
                self.db.rollback()
                raise NotFoundError("Company", company_id)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to delete company %s", company_id)
            raise StoreError(f"Failed to delete company: {exc}") from exc

        logger.info("Deleted company %s", company_id)
        return asset_urls
