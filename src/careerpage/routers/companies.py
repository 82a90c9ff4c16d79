"""Companies API router - create, list, detail and delete endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from careerpage.database import get_db
from careerpage.errors import CareerPageError
from careerpage.models.company import Company
from careerpage.routers.deps import get_owned_company, get_owner_id
from careerpage.schemas.common import ActionResult
from careerpage.schemas.company import Company as CompanySchema
from careerpage.schemas.company import CompanyCreate, CompanyCreated
from careerpage.services.companies import CompanyService
from careerpage.services.object_store import ObjectStore, get_object_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["companies"])

# Buckets a career page's logo and banner are uploaded to
PAGE_ASSET_BUCKETS = ("company-logos", "company-banners")


@router.post("/companies", response_model=CompanyCreated, status_code=201)
def create_company(
    payload: CompanyCreate,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> CompanyCreated:
    """
    Create a company and its draft career page.

    Returns:
        The new company and the id of its career page.

    Raises:
        ValidationError (422): Malformed name or slug; nothing was written.
        DuplicateSlugError (409): The slug is taken.
    """
    company, page = CompanyService(db).create_company(owner_id, payload.name, payload.slug)
    return CompanyCreated(company=CompanySchema.model_validate(company), career_page_id=page.id)


@router.get("/companies", response_model=list[CompanySchema])
def list_companies(
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> list[CompanySchema]:
    """List the caller's companies, most recently created first."""
    companies = CompanyService(db).list_companies(owner_id)
    return [CompanySchema.model_validate(c) for c in companies]


@router.get("/companies/{company_id}", response_model=CompanySchema)
def get_company(company: Company = Depends(get_owned_company)) -> CompanySchema:
    """Get one of the caller's companies."""
    return CompanySchema.model_validate(company)


@router.delete("/companies/{company_id}", response_model=ActionResult)
async def delete_company(
    company_id: int,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
    store: ObjectStore = Depends(get_object_store),
) -> ActionResult:
    """
    Delete a company with its page, sections and jobs.

    Logo and banner objects are removed afterwards on a best-effort basis;
    failures there are logged and do not fail the request.
    """
    asset_urls = CompanyService(db).delete_company(owner_id, company_id)
    for url in asset_urls:
        for bucket in PAGE_ASSET_BUCKETS:
            key = store.key_from_url(bucket, url)
            if key is None:
                continue
            try:
                await store.remove(bucket, key)
            except CareerPageError as exc:
                logger.warning("Could not remove %s/%s: %s", bucket, key, exc)
            break
    return ActionResult()
