from abc import ABC, abstractmethod
from typing import List
import logging

from playwright.async_api import BrowserContext

from semijobs.config.settings import Settings
from semijobs.core.models import EMPTY_FIELDS, Company, ExtractedJobFields, Job, JobListing
from semijobs.core.rate_limit import FETCH_FAILURES, polite_delay
from semijobs.extraction.profiles import ExtractionProfile

logger = logging.getLogger(__name__)


class JobPortalAdapter(ABC):
    """
    Abstract base class for all career-site platform adapters.
    """

    platform: str = ""

    def __init__(
        self,
        context: BrowserContext,
        company: Company,
        settings: Settings,
        profile: ExtractionProfile,
    ):
        self.context = context
        self.company = company
        self.settings = settings
        self.profile = profile

    @abstractmethod
    async def discover_jobs(self) -> List[JobListing]:
        """
        Walk the listing pages of the career site.
        Returns:
            List[JobListing]: Jobs with title, URL, location and posting date.
        """
        pass

    @abstractmethod
    async def scrape_job(self, listing: JobListing) -> ExtractedJobFields:
        """
        Fetch one job's description and extract its fields.
        Args:
            listing (JobListing): A job returned by discover_jobs().
        Returns:
            ExtractedJobFields: Extracted fields, EMPTY_FIELDS when nothing was found.
        """
        pass

    async def scrape_company(self, fetch_details: bool = True) -> List[Job]:
        """
        Discover all jobs, then fetch details one at a time with a fixed delay.
        A failed detail fetch leaves that job's fields empty instead of
        aborting the company.
        """
        logger.info(f"=== Starting {self.platform} scrape for {self.company.name} ===")
        listings = await self.discover_jobs()

        if not listings:
            logger.warning(f"No jobs found for {self.company.name}")
            return []

        if not fetch_details:
            return [Job.from_listing(self.company.name, listing) for listing in listings]

        logger.info(f"Fetching details for {len(listings)} jobs")
        jobs: List[Job] = []
        for i, listing in enumerate(listings, 1):
            try:
                details = await self.scrape_job(listing)
            except FETCH_FAILURES as e:
                logger.warning(f"Error fetching details for {listing.url}: {e}")
                details = EMPTY_FIELDS

            jobs.append(Job.from_listing(self.company.name, listing, details))
            logger.info(
                f"[{i}/{len(listings)}] {listing.title} ({details.found()} fields extracted)"
            )

            if i < len(listings):
                await polite_delay(self.settings.DELAY_BETWEEN_REQUESTS)

        return jobs
