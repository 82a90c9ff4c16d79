"""Database models package."""

from careerpage.models.application import Application
from careerpage.models.career_page import CareerPage
from careerpage.models.company import Company
from careerpage.models.job import Job
from careerpage.models.page_section import PageSection

__all__ = ["Application", "CareerPage", "Company", "Job", "PageSection"]
