"""Section ordering service."""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from careerpage.config import SequencerConfig, sequencer_config
from careerpage.database import is_unique_violation
from careerpage.errors import NotFoundError, StoreError, ValidationError
from careerpage.models.career_page import CareerPage
from careerpage.models.page_section import PageSection
from careerpage.schemas.section import SectionType
from careerpage.utils.timestamps import utcnow

logger = logging.getLogger(__name__)

DEFAULT_SECTION_TITLES: Mapping[str, str] = MappingProxyType(
    {
        "about": "About Us",
        "culture": "Our Culture",
        "benefits": "Benefits & Perks",
        "team": "Meet the Team",
        "values": "Our Values",
        "custom": "New Section",
    }
)
FALLBACK_SECTION_TITLE = "New Section"
DEFAULT_SECTION_CONTENT = "<p>Write something here...</p>"

SECTION_TYPES = frozenset(t.value for t in SectionType)
UPDATABLE_FIELDS = frozenset({"title", "content", "order", "visible"})


class SectionSequencer:
    """
    Service maintaining the total order of sections on a career page.

    Guarantees:
    - Appends assign ``max(order) + 1`` (0 on an empty page). Each append locks
      the page before reading the maximum, so appends to one page run one at
      a time. ``(career_page_id, order)`` is unique as a backstop: an append
      that still collides is retried with a fresh maximum after a short
      jittered pause.
    - Deletes never renumber; readers sort by ``order`` and tolerate gaps.
    - Reorders rewrite every position of the page in one transaction.
    """

    def __init__(
        self,
        db: Session,
        titles: Mapping[str, str] = DEFAULT_SECTION_TITLES,
        default_content: str = DEFAULT_SECTION_CONTENT,
        config: SequencerConfig | None = None,
    ) -> None:
        """
        Initialize the sequencer.

        Args:
            db: SQLAlchemy database session
            titles: Immutable ``{type: default title}`` table
            default_content: Body given to new sections
            config: Sequencer configuration (uses loaded config if not provided)
        """
        self.db = db
        self.titles = titles
        self.default_content = default_content
        self.config = config or sequencer_config

    def default_title(self, section_type: str) -> str:
        """
        Look up the default title for a section type.

        Examples:
            >>> SectionSequencer(db).default_title("about")
            'About Us'
            >>> SectionSequencer(db).default_title("unknown")
            'New Section'
        """
        return self.titles.get(section_type) or FALLBACK_SECTION_TITLE

    def _next_order(self, page_id: int) -> int:
        current = self.db.scalar(
            select(func.max(PageSection.order)).where(PageSection.career_page_id == page_id)
        )
        return (current if current is not None else -1) + 1

    def _lock_page(self, page_id: int) -> CareerPage | None:
        """
        Serialize appends to a page for the rest of the current transaction.

        PostgreSQL takes a row lock on the page. SQLite has no row locks, so the
        transaction is opened with ``BEGIN IMMEDIATE``, which holds the write
        lock until commit or rollback.
        """
        connection = self.db.connection()
        if connection.dialect.name == "sqlite":
            if not connection.connection.dbapi_connection.in_transaction:
                connection.exec_driver_sql("BEGIN IMMEDIATE")
        return self.db.scalars(
            select(CareerPage).where(CareerPage.id == page_id).with_for_update()
        ).first()

    @staticmethod
    def _ordered(page_id: int):
        return (
            select(PageSection)
            .where(PageSection.career_page_id == page_id)
            .order_by(PageSection.order.asc(), PageSection.id.asc())
        )

    def _backoff(self, attempt: int) -> None:
        delay = random.uniform(0, self.config.insert_retry_backoff_seconds * attempt)
        if delay > 0:
            time.sleep(delay)

    def append(self, page_id: int, section_type: str, title: str | None = None) -> PageSection:
        """
        Append a section at the end of a page.

        Args:
            page_id: Career page to append to
            section_type: One of the known section types
            title: Optional title; defaults from the title table

        Returns:
            The persisted section

        Raises:
            ValidationError: If the section type is unknown
            NotFoundError: If the page does not exist
            StoreError: If the insert fails or no free position could be claimed
        """
        if section_type not in SECTION_TYPES:
            raise ValidationError(
                "Invalid data",
                {"type": [f"Section type must be one of: {', '.join(sorted(SECTION_TYPES))}"]},
            )

        attempts = max(1, self.config.insert_retry_attempts)
        for attempt in range(1, attempts + 1):
            try:
                if self._lock_page(page_id) is None:
                    self.db.rollback()
                    raise NotFoundError("Career page", page_id)
                next_order = self._next_order(page_id)
                section = PageSection(
                    career_page_id=page_id,
                    type=section_type,
                    title=title or self.default_title(section_type),
                    content=self.default_content,
                    order=next_order,
                    visible=True,
                )
                self.db.add(section)
                self.db.commit()
            except IntegrityError as exc:
                self.db.rollback()
                if not is_unique_violation(exc):
                    logger.exception("Failed to append section to page %s", page_id)
                    raise StoreError(f"Failed to create section: {exc.orig}") from exc
                logger.warning(
                    "Position %s on page %s was claimed concurrently (attempt %d/%d)",
                    next_order,
                    page_id,
                    attempt,
                    attempts,
                )
                if attempt < attempts:
                    self._backoff(attempt)
                continue
            except SQLAlchemyError as exc:
                self.db.rollback()
                logger.exception("Failed to append section to page %s", page_id)
                raise StoreError(f"Failed to create section: {exc}") from exc

            self.db.refresh(section)
            logger.info(
                "Appended %s section %s to page %s at position %s",
                section_type,
                section.id,
                page_id,
                section.order,
            )
            return section

        raise StoreError(
            f"Failed to create section: no free position after {attempts} attempts",
            {"page_id": page_id},
        )

    def get(self, section_id: int) -> PageSection:
        """
        Fetch a section by id.

        Raises:
            NotFoundError: If the section does not exist
        """
        section = self.db.get(PageSection, section_id)
        if section is None:
            raise NotFoundError("Section", section_id)
        return section

    def update(self, section_id: int, fields: dict[str, Any]) -> PageSection:
        """
        Apply only the supplied fields to a section and stamp ``updated_at``.

        A caller-supplied ``order`` is written as is. A position already held
        by another section of the page is rejected by the store.

        Args:
            section_id: Section to update
            fields: Subset of title, content, order, visible

        Returns:
            The refreshed section

        Raises:
            NotFoundError: If the section does not exist
            StoreError: If the write fails (including a taken position)
        """
        section = self.get(section_id)
        for key, value in fields.items():
            if key in UPDATABLE_FIELDS:
                setattr(section, key, value)
        section.updated_at = utcnow()
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if is_unique_violation(exc):
                raise StoreError(
                    "Section position already in use", {"order": fields.get("order")}
                ) from exc
            logger.exception("Failed to update section %s", section_id)
            raise StoreError(f"Failed to update section: {exc.orig}") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to update section %s", section_id)
            raise StoreError(f"Failed to update section: {exc}") from exc
        self.db.refresh(section)
        return section

    def delete(self, section_id: int) -> None:
        """
        Remove a section without renumbering the remaining ones.

        Raises:
            StoreError: If the delete fails
        """
        try:
            self.db.execute(delete(PageSection).where(PageSection.id == section_id))
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to delete section %s", section_id)
            raise StoreError(f"Failed to delete section: {exc}") from exc
        logger.info("Deleted section %s", section_id)

    def list(self, page_id: int) -> list[PageSection]:
        """
        List a page's sections by ``order`` ascending.

        Read failures are logged and yield an empty list.
        """
        try:
            return list(self.db.scalars(self._ordered(page_id)))
        except SQLAlchemyError:
            logger.exception("Failed to list sections for page %s", page_id)
            return []

    def reorder(self, page_id: int, section_ids: list[int]) -> list[PageSection]:
        """
        Move every section of a page to the position given by ``section_ids``.

        Positions are rewritten to ``0..n-1`` in one transaction. Sections are
        first parked on negative positions so the uniqueness constraint holds
        after every statement.

        Args:
            page_id: Career page being reordered
            section_ids: All section ids of the page, in their new order

        Returns:
            The sections in their new order

        Raises:
            ValidationError: If the ids are not exactly the page's sections
            StoreError: If the rewrite fails (nothing is changed)
        """
        try:
            sections = {s.id: s for s in self.db.scalars(self._ordered(page_id))}
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to load sections of page %s", page_id)
            raise StoreError(f"Failed to reorder sections: {exc}") from exc

        fields: dict[str, list[str]] = {}
        if len(set(section_ids)) != len(section_ids):
            fields["section_ids"] = ["Section ids must not repeat"]
        elif set(section_ids) != set(sections):
            fields["section_ids"] = ["Section ids must list every section of the page exactly once"]
        if fields:
            raise ValidationError("Invalid data", fields)

        now = utcnow()
        try:
            for index, section_id in enumerate(section_ids):
                sections[section_id].order = -(index + 1)
            self.db.flush()
            for index, section_id in enumerate(section_ids):
                section = sections[section_id]
                section.order = index
                section.updated_at = now
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to reorder sections of page %s", page_id)
            raise StoreError(f"Failed to reorder sections: {exc}") from exc

        logger.info("Reordered %d sections on page %s", len(section_ids), page_id)
        return self.list(page_id)
