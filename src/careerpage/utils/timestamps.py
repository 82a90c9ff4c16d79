"""Timestamp helpers."""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """
    Current UTC time as a naive datetime.

    Naive values are stored and compared consistently across SQLite and
    PostgreSQL ``TIMESTAMP WITHOUT TIME ZONE`` columns.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
