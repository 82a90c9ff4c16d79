"""Company database model."""

from sqlalchemy import Column, DateTime, Integer, String

from careerpage.database import Base
from careerpage.utils.timestamps import utcnow


class Company(Base):
    """
    Company model representing an employer that owns a career page.

    Attributes:
        id: Primary key
        name: Display name
        slug: URL-friendly company identifier (unique, immutable after creation)
        owner_id: Opaque id of the principal that owns the company
        created_at: Timestamp when record was created
        updated_at: Timestamp of the last change
    """

    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True, index=True)
    owner_id = Column(String, nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self) -> str:
        """String representation of Company."""
        return f"<Company(id={self.id}, name='{self.name}', slug='{self.slug}')>"
