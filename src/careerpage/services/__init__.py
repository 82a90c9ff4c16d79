"""Services package."""

from careerpage.services.applications import ApplicationService
from careerpage.services.bulk_actions import BulkJobCoordinator, BulkOutcome
from careerpage.services.career_pages import CareerPageService
from careerpage.services.companies import CompanyService
from careerpage.services.csv_import import JobCsvImporter
from careerpage.services.discoverability import DiscoverabilityIndexBuilder
from careerpage.services.jobs import JobService
from careerpage.services.object_store import HttpObjectStore, LocalObjectStore, ObjectStore
from careerpage.services.public import PublicSiteService
from careerpage.services.sections import SectionSequencer
from careerpage.services.uploads import UploadGatekeeper

__all__ = [
    "ApplicationService",
    "BulkJobCoordinator",
    "BulkOutcome",
    "CareerPageService",
    "CompanyService",
    "DiscoverabilityIndexBuilder",
    "HttpObjectStore",
    "JobCsvImporter",
    "JobService",
    "LocalObjectStore",
    "ObjectStore",
    "PublicSiteService",
    "SectionSequencer",
    "UploadGatekeeper",
]
