"""Career page service: presentation updates and the page publish state."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from careerpage.errors import NotFoundError, StoreError
from careerpage.models.career_page import CareerPage
from careerpage.models.company import Company
from careerpage.services.companies import touch_companies
from careerpage.utils.timestamps import utcnow

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"theme", "logo_url", "banner_url", "video_url"})


class CareerPageService:
    """
    Service for reading and mutating a company's career page.

    Publishing is a direct Draft/Published flip with no intermediate states.
    Toggling the page never touches the publish flags of the company's jobs;
    discoverability of a job always requires the page to be published too.
    """

    def __init__(self, db: Session) -> None:
        """
        Initialize the career page service.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def get_for_company(self, company_id: int) -> CareerPage:
        """
        Fetch the career page of a company.

        Raises:
            NotFoundError: If the company has no page yet (a valid empty state)
            StoreError: If the read itself fails
        """
        try:
            page = self.db.scalars(
                select(CareerPage).where(CareerPage.company_id == company_id)
            ).first()
        except SQLAlchemyError as exc:
            logger.exception("Failed to fetch career page for company %s", company_id)
            raise StoreError(f"Failed to fetch career page: {exc}") from exc
        if page is None:
            raise NotFoundError("Career page for company", company_id)
        return page

    def get_owned(self, owner_id: str, page_id: int) -> CareerPage:
        """
        Fetch a career page whose company the principal owns.

        Raises:
            NotFoundError: If the page is absent or owned by another principal
        """
        row = self.db.execute(
            select(CareerPage, Company.owner_id)
            .join(Company, CareerPage.company_id == Company.id)
            .where(CareerPage.id == page_id)
        ).first()
        if row is None or row[1] != owner_id:
            raise NotFoundError("Career page", page_id)
        return row[0]

    def update_page(self, page: CareerPage, fields: dict[str, Any]) -> CareerPage:
        """
        Apply a partial update to a page's presentation fields.

        Args:
            page: The page to update
            fields: Supplied fields only; unknown keys are ignored

        Returns:
            The refreshed page
        """
        for key, value in fields.items():
            if key in UPDATABLE_FIELDS:
                setattr(page, key, value)
        page.updated_at = utcnow()
        self._commit(f"update career page {page.id}", page.company_id)
        self.db.refresh(page)
        return page

    def set_published(self, page: CareerPage, published: bool) -> CareerPage:
        """
        Flip the page between Draft and Published.

        Args:
            page: The page to toggle
            published: Target state

        Returns:
            The refreshed page
        """
        page.published = published
        page.updated_at = utcnow()
        self._commit(f"set career page {page.id} published={published}", page.company_id)
        self.db.refresh(page)
        logger.info(
            "Career page %s is now %s", page.id, "published" if published else "draft"
        )
        return page

    def _commit(self, action: str, company_id: int) -> None:
        try:
            touch_companies(self.db, Company.id == company_id)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to %s", action)
            raise StoreError(f"Failed to {action}: {exc}") from exc
