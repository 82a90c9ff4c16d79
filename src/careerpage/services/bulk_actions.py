"""Bulk job mutation coordinator."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from careerpage.errors import StoreError, ValidationError
from careerpage.models.company import Company
from careerpage.models.job import Job
from careerpage.schemas.job import BulkAction
from careerpage.services.companies import touch_companies
from careerpage.utils.timestamps import utcnow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BulkOutcome:
    """Batch-level result; there is no per-item accounting."""

    action: BulkAction
    requested: int
    affected: int


class BulkJobCoordinator:
    """
    Apply one action to a set of jobs with a single store statement.

    Success and failure are reported for the batch as a whole. A failure means
    the state of the selected jobs is uncertain and the caller should re-fetch
    the job list rather than assume nothing changed.
    """

    def __init__(self, db: Session) -> None:
        """
        Initialize the coordinator.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def apply(
        self,
        job_ids: Iterable[int],
        action: BulkAction | str,
        company_id: int | None = None,
    ) -> BulkOutcome:
        """
        Publish, unpublish or delete the selected jobs.

        Args:
            job_ids: Non-empty selection of job ids
            action: publish, unpublish or delete
            company_id: When given, the statement only touches this company's jobs

        Returns:
            BulkOutcome with the number of ids requested and rows affected

        Raises:
            ValidationError: If the selection is empty or the action unknown
            StoreError: If the statement fails; state is then uncertain
        """
        ids = sorted(set(job_ids))
        if not ids:
            raise ValidationError("No jobs selected", {"job_ids": ["Select at least one job"]})
        try:
            action = BulkAction(action)
        except ValueError as exc:
            raise ValidationError(
                "Invalid data",
                {"action": [f"Action must be one of: {', '.join(a.value for a in BulkAction)}"]},
            ) from exc

        conditions = [Job.id.in_(ids)]
        if company_id is not None:
            conditions.append(Job.company_id == company_id)

        if action is BulkAction.DELETE:
            stmt = delete(Job).where(*conditions)
        else:
            stmt = (
                update(Job)
                .where(*conditions)
                .values(published=action is BulkAction.PUBLISH, updated_at=utcnow())
            )

        try:
            touch_companies(self.db, Company.id.in_(select(Job.company_id).where(*conditions)))
            result = self.db.execute(stmt.execution_options(synchronize_session=False))
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Bulk %s of %d jobs failed", action.value, len(ids))
            raise StoreError(
                f"Bulk {action.value} failed; job state is uncertain, re-fetch the job list",
                {"action": action.value, "job_ids": ids},
            ) from exc

        # Loaded Job instances may hold pre-statement values
        self.db.expire_all()
        outcome = BulkOutcome(action=action, requested=len(ids), affected=result.rowcount)
        logger.info(
            "Bulk %s applied: requested=%d affected=%d",
            action.value,
            outcome.requested,
            outcome.affected,
        )
        return outcome
