"""Job database model."""

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


class Job(Base):
    """
    Job model representing a posting on a company's career page.

    Attributes:
        id: Primary key
        company_id: Foreign key to companies table
        title: Job title
        description: Rich text job description
        job_slug: URL segment for the public job page (unique per company)
        job_type: full-time, part-time, contract, internship, temporary, permanent
        location: Free-form location
        team: Team or department
        work_policy: Remote, Hybrid or On-site
        employment_type: Full time, Part time, Contract
        experience_level: Junior, Mid-level, Senior
        salary_range: Free-form salary text
        published: Whether the job is externally discoverable
        created_at: Timestamp when record was created
        updated_at: Timestamp of the last change
    """

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(
        Integer,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    job_slug = Column(String, nullable=True)
    job_type = Column(String, nullable=True)
    location = Column(String, nullable=True)
    team = Column(String, nullable=True)
    work_policy = Column(String, nullable=True)
    employment_type = Column(String, nullable=True)
    experience_level = Column(String, nullable=True)
    salary_range = Column(String, nullable=True)
    published = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (UniqueConstraint("company_id", "job_slug", name="_company_job_slug_uc"),)

    def __repr__(self) -> str:
        """String representation of Job."""
        return f"<Job(id={self.id}, title='{self.title}', company_id={self.company_id})>"
