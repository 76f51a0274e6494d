"""
OracleAdapter - platform adapter for Oracle Cloud CX career sites.

Both the job list and the job details come from the site's REST API as
JSON; no page rendering is needed.
"""

import logging
from typing import List

from semijobs.adapters.base import JobPortalAdapter
from semijobs.core.models import ExtractedJobFields, JobListing
from semijobs.core.rate_limit import with_retry
from semijobs.adapters.oracle import discovery as discovery_module
from semijobs.adapters.oracle.api import build_detail_url, extract_api_base, get_json
from semijobs.adapters.oracle.parsing import parse_job_details

logger = logging.getLogger(__name__)


class OracleAdapter(JobPortalAdapter):
    """
    Oracle CX adapter, US jobs only. Used by Texas Instruments.
    """

    platform = "oracle"

    async def discover_jobs(self) -> List[JobListing]:
        return await discovery_module.discover_jobs(self.context, self.company, self.settings)

    async def scrape_job(self, listing: JobListing) -> ExtractedJobFields:
        job_id = listing.external_id or listing.url.rstrip("/").rsplit("/", 1)[-1]
        logger.debug(f"Fetching Oracle CX job details: ID {job_id}")

        url = build_detail_url(extract_api_base(self.company.careers_url), job_id)
        fetch = with_retry(self.settings.MAX_RETRIES, self.settings.RETRY_DELAY)(get_json)
        detail = await fetch(self.context, url, self.settings.REQUEST_TIMEOUT)

        return parse_job_details(detail, self.profile)
