"""Shared router dependencies."""

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from careerpage.database import get_db
from careerpage.errors import AuthError
from careerpage.models.company import Company
from careerpage.services.companies import CompanyService


def get_owner_id(x_owner_id: str | None = Header(default=None)) -> str:
    """
    Extract the authenticated principal id set by the identity provider.

    Raises:
        AuthError: If the header is missing or blank
    """
    if not x_owner_id or not x_owner_id.strip():
        raise AuthError()
    return x_owner_id.strip()


def get_owned_company(
    company_id: int,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> Company:
    """Resolve ``company_id`` from the path to a company the caller owns."""
    return CompanyService(db).get_owned(owner_id, company_id)
