"""CareerPage database model."""

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String

from careerpage.database import Base
from careerpage.utils.timestamps import utcnow


def default_theme() -> dict:
    """Theme assigned to a freshly created career page."""
    return {"primaryColor": "#000000"}


class CareerPage(Base):
    """
    CareerPage model, exactly one per company.

    Attributes:
        id: Primary key
        company_id: Foreign key to companies table (unique, 1:1)
        theme: JSON theme settings (colors etc.)
        logo_url: Public URL of the uploaded logo
        banner_url: Public URL of the uploaded banner
        video_url: Public URL of the uploaded intro video
        published: Whether the page is externally discoverable
        created_at: Timestamp when record was created
        updated_at: Timestamp of the last change
    """

    __tablename__ = "career_pages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(
        Integer,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    theme = Column(JSON, nullable=False, default=default_theme)
    logo_url = Column(String, nullable=True)
    banner_url = Column(String, nullable=True)
    video_url = Column(String, nullable=True)
    published = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self) -> str:
        """String representation of CareerPage."""
        return (
            f"<CareerPage(id={self.id}, company_id={self.company_id}, "
            f"published={self.published})>"
        )
