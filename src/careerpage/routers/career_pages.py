"""Career page API router - fetch, update and publish endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from careerpage.database import get_db
from careerpage.models.company import Company
from careerpage.routers.deps import get_owned_company, get_owner_id
from careerpage.schemas.career_page import CareerPage as CareerPageSchema
from careerpage.schemas.career_page import CareerPageUpdate, PublishToggle
from careerpage.services.career_pages import CareerPageService

router = APIRouter(tags=["career-pages"])


@router.get("/companies/{company_id}/career-page", response_model=CareerPageSchema)
def get_career_page(
    company: Company = Depends(get_owned_company),
    db: Session = Depends(get_db),
) -> CareerPageSchema:
    """
    Get the career page of one of the caller's companies.

    Raises:
        NotFoundError (404): The company has no career page yet.
    """
    page = CareerPageService(db).get_for_company(company.id)
    return CareerPageSchema.model_validate(page)


@router.patch("/career-pages/{page_id}", response_model=CareerPageSchema)
def update_career_page(
    page_id: int,
    payload: CareerPageUpdate,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> CareerPageSchema:
    """Update theme and asset URLs; only supplied fields change."""
    service = CareerPageService(db)
    page = service.get_owned(owner_id, page_id)
    page = service.update_page(page, payload.model_dump(exclude_unset=True))
    return CareerPageSchema.model_validate(page)


@router.put("/career-pages/{page_id}/publish", response_model=CareerPageSchema)
def set_career_page_published(
    page_id: int,
    payload: PublishToggle,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> CareerPageSchema:
    """Publish or unpublish a career page. Job publish flags are left as they are."""
    service = CareerPageService(db)
    page = service.get_owned(owner_id, page_id)
    page = service.set_published(page, payload.published)
    return CareerPageSchema.model_validate(page)
