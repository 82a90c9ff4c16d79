"""Application database model."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from careerpage.database import Base
from careerpage.utils.timestamps import utcnow


class Application(Base):
    """
    Application model, a candidate's submission for a published job.

    Attributes:
        id: Primary key
        job_id: Foreign key to jobs table (deleted with the job)
        first_name: Applicant first name
        last_name: Applicant last name
        email: Applicant email (optional)
        linkedin_url: Applicant LinkedIn profile
        resume_url: Object store URL or path of the uploaded resume
        status: new, reviewing, interviewing, offered, rejected, withdrawn
        created_at: Timestamp when record was created
    """

    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    job_id = Column(
        Integer,
        ForeignKey("jobs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    linkedin_url = Column(String, nullable=False)
    resume_url = Column(String, nullable=False)
    status = Column(String, default="new", nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self) -> str:
        """String representation of Application."""
        return f"<Application(id={self.id}, job_id={self.job_id}, status='{self.status}')>"
