"""Sections API router - append, list, update, reorder and delete endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from careerpage.database import get_db
from careerpage.models.page_section import PageSection
from careerpage.routers.deps import get_owner_id
from careerpage.schemas.common import ActionResult
from careerpage.schemas.section import Section, SectionCreate, SectionReorder, SectionUpdate
from careerpage.services.career_pages import CareerPageService
from careerpage.services.sections import SectionSequencer

router = APIRouter(tags=["sections"])


def _owned_section(db: Session, owner_id: str, section_id: int) -> PageSection:
    section = SectionSequencer(db).get(section_id)
    CareerPageService(db).get_owned(owner_id, section.career_page_id)
    return section


@router.post("/career-pages/{page_id}/sections", response_model=Section, status_code=201)
def create_section(
    page_id: int,
    payload: SectionCreate,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> Section:
    """Append a section to the end of a page."""
    CareerPageService(db).get_owned(owner_id, page_id)
    section = SectionSequencer(db).append(page_id, payload.type.value, payload.title)
    return Section.model_validate(section)


@router.get("/career-pages/{page_id}/sections", response_model=list[Section])
def list_sections(
    page_id: int,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> list[Section]:
    """List a page's sections by position, including hidden ones."""
    CareerPageService(db).get_owned(owner_id, page_id)
    return [Section.model_validate(s) for s in SectionSequencer(db).list(page_id)]


@router.put("/career-pages/{page_id}/sections/order", response_model=list[Section])
def reorder_sections(
    page_id: int,
    payload: SectionReorder,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> list[Section]:
    """Rewrite all positions of a page from the given id order."""
    CareerPageService(db).get_owned(owner_id, page_id)
    sections = SectionSequencer(db).reorder(page_id, payload.section_ids)
    return [Section.model_validate(s) for s in sections]


@router.patch("/sections/{section_id}", response_model=Section)
def update_section(
    section_id: int,
    payload: SectionUpdate,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> Section:
    """Update only the supplied section fields."""
    _owned_section(db, owner_id, section_id)
    fields = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
    section = SectionSequencer(db).update(section_id, fields)
    return Section.model_validate(section)


@router.delete("/sections/{section_id}", response_model=ActionResult)
def delete_section(
    section_id: int,
    owner_id: str = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> ActionResult:
    """Delete a section; remaining positions are not renumbered."""
    _owned_section(db, owner_id, section_id)
    SectionSequencer(db).delete(section_id)
    return ActionResult()
