"""Discoverability index schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class ChangeFrequency(str, Enum):
    """Sitemap change frequency hint."""

    DAILY = "daily"
    WEEKLY = "weekly"


class SitemapEntry(BaseModel):
    """One externally linkable URL."""

    url: str
    last_modified: datetime
    change_frequency: ChangeFrequency
    priority: float
