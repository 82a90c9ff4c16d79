"""Slug generation and validation utilities."""

import re

from slugify import slugify

from careerpage.errors import ValidationError

SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")
MIN_SLUG_LENGTH = 2
MIN_NAME_LENGTH = 2


def create_slug(text: str) -> str:
    """
    Create a URL-friendly slug from text.

    Args:
        text: The text to convert to a slug

    Returns:
        A lowercase, hyphenated slug (empty when nothing usable remains)

    Examples:
        >>> create_slug("Acme Corporation")
        'acme-corporation'
        >>> create_slug("Senior Backend Engineer (Remote)")
        'senior-backend-engineer-remote'
    """
    return slugify(text or "", lowercase=True, separator="-")


def slug_errors(slug: str | None, min_length: int = MIN_SLUG_LENGTH) -> list[str]:
    """
    Collect shape problems for a proposed slug.

    Args:
        slug: Proposed slug, exactly as the caller supplied it
        min_length: Minimum accepted length

    Returns:
        List of messages, empty when the slug is well formed
    """
    if not slug:
        return ["Slug is required"]
    errors: list[str] = []
    if len(slug) < min_length:
        errors.append(f"Slug must be at least {min_length} characters")
    if not SLUG_PATTERN.match(slug):
        errors.append("Slug must be lowercase alphanumeric with hyphens")
    return errors


def validate_company_input(name: str | None, slug: str | None) -> tuple[str, str]:
    """
    Validate the fields of a new company before anything is written.

    Only the shape is checked here; uniqueness is enforced by the store and
    reported as DuplicateSlugError.

    Args:
        name: Company display name
        slug: Proposed company slug

    Returns:
        Tuple of (name, slug) with surrounding whitespace removed

    Raises:
        ValidationError: With per-field messages when any field is invalid
    """
    name = (name or "").strip()
    slug = (slug or "").strip()

    fields: dict[str, list[str]] = {}
    if len(name) < MIN_NAME_LENGTH:
        fields["name"] = [f"Name must be at least {MIN_NAME_LENGTH} characters"]
    errors = slug_errors(slug)
    if errors:
        fields["slug"] = errors

    if fields:
        raise ValidationError("Invalid data", fields)
    return name, slug


def resolve_job_slug(job_slug: str | None, title: str) -> str | None:
    """
    Return the slug a job should be stored with.

    An explicit slug must already be well formed; otherwise one is derived
    from the title.

    Raises:
        ValidationError: If an explicit slug is malformed
    """
    if job_slug:
        errors = slug_errors(job_slug, min_length=1)
        if errors:
            raise ValidationError("Invalid data", {"job_slug": errors})
        return job_slug
    return create_slug(title) or None
