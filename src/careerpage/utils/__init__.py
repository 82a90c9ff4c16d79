"""Utility functions package."""

from careerpage.utils.html_text import html_to_text
from careerpage.utils.slug import create_slug, validate_company_input
from careerpage.utils.timestamps import utcnow

__all__ = [
    "create_slug",
    "html_to_text",
    "utcnow",
    "validate_company_input",
]
