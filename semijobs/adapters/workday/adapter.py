"""
WorkdayAdapter - platform adapter for Workday career sites.

Implements JobPortalAdapter. Delegates all work to submodules:
- discovery.py for walking the paginated job list
- scraping.py for individual job detail extraction
"""

import logging
from typing import List

from semijobs.adapters.base import JobPortalAdapter
from semijobs.core.models import ExtractedJobFields, JobListing
from semijobs.adapters.workday import discovery as discovery_module
from semijobs.adapters.workday import scraping as scraping_module

logger = logging.getLogger(__name__)


class WorkdayAdapter(JobPortalAdapter):
    """
    Workday adapter: rendered list pages with offset pagination, description
    text parsed with ordered regex section patterns.
    Used by Applied Materials and NXP Semiconductors.
    """

    platform = "workday"

    async def discover_jobs(self) -> List[JobListing]:
        return await discovery_module.discover_jobs(self.context, self.company, self.settings)

    async def scrape_job(self, listing: JobListing) -> ExtractedJobFields:
        return await scraping_module.scrape_job_details(
            self.context, listing.url, self.settings, self.profile
        )
