"""PageSection database model."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)

from careerpage.database import Base
from careerpage.utils.timestamps import utcnow


class PageSection(Base):
    """
    PageSection model, an ordered content block on a career page.

    Attributes:
        id: Primary key
        career_page_id: Foreign key to career_pages table
        type: Section type (about, culture, benefits, team, values, custom)
        title: Section heading
        content: Rich text (HTML) body
        order: Position on the page; unique per page, gaps allowed
        visible: Whether the section is rendered publicly
        created_at: Timestamp when record was created
        updated_at: Timestamp of the last change
    """

    __tablename__ = "page_sections"

    id = Column(Integer, primary_key=True, autoincrement=True)
    career_page_id = Column(
        Integer,
        ForeignKey("career_pages.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type = Column(String, nullable=False)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False, default="")
    order = Column(Integer, nullable=False)
    visible = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    # No two live sections of a page may share a position
    __table_args__ = (
        UniqueConstraint("career_page_id", "order", name="_page_section_order_uc"),
    )

    def __repr__(self) -> str:
        """String representation of PageSection."""
        return (
            f"<PageSection(id={self.id}, page={self.career_page_id}, "
            f"type='{self.type}', order={self.order})>"
        )
