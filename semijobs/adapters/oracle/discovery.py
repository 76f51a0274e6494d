"""
Job discovery through the Oracle CX requisitions API.
Offset/limit pagination, US jobs only.
"""

import logging
from typing import List, Optional

from playwright.async_api import BrowserContext

from semijobs.config.settings import Settings
from semijobs.core.models import Company, JobListing
from semijobs.core.rate_limit import FETCH_FAILURES, polite_delay, with_retry
from semijobs.adapters.oracle.api import (
    build_requisitions_url,
    extract_api_base,
    extract_site_number,
    get_json,
)
from semijobs.adapters.oracle.config import PAGE_SIZE
from semijobs.adapters.oracle.parsing import parse_requisition

logger = logging.getLogger(__name__)


async def discover_jobs(
    context: BrowserContext, company: Company, settings: Settings
) -> List[JobListing]:
    """
    Page through the requisition list until the reported total is reached,
    a page is short or empty, a fetch fails, or MAX_PAGES_PER_COMPANY is hit.
    """
    api_base = extract_api_base(company.careers_url)
    site_number = extract_site_number(company.careers_url)
    fetch = with_retry(settings.MAX_RETRIES, settings.RETRY_DELAY)(get_json)

    jobs: List[JobListing] = []
    total_jobs: Optional[int] = None
    offset = 0
    page_num = 1

    while page_num <= settings.MAX_PAGES_PER_COMPANY:
        logger.info(f"Scraping page {page_num} for {company.name} (offset: {offset})")
        url = build_requisitions_url(api_base, site_number, offset, PAGE_SIZE)

        try:
            data = await fetch(context, url, settings.REQUEST_TIMEOUT)
        except FETCH_FAILURES as e:
            logger.warning(f"Failed to fetch page {page_num} - stopping: {e}")
            break

        items = data.get("items") or []
        if not items:
            logger.info("No items in API response - stopping")
            break

        top_item = items[0]
        if total_jobs is None and top_item.get("TotalJobsCount") is not None:
            total_jobs = int(top_item["TotalJobsCount"])
            logger.info(f"Total jobs reported by API: {total_jobs}")

        requisitions = top_item.get("requisitionList") or []
        if not requisitions:
            logger.info("No more jobs in requisitionList - stopping")
            break

        page_jobs = [
            listing
            for listing in (parse_requisition(job, company.careers_url) for job in requisitions)
            if listing is not None
        ]
        jobs.extend(page_jobs)
        logger.info(f"Found {len(page_jobs)} US jobs on this page ({len(jobs)} total US)")

        if total_jobs is not None and offset + len(requisitions) >= total_jobs:
            logger.info(f"Reached all {total_jobs} jobs")
            break
        if len(requisitions) < PAGE_SIZE:
            logger.info("Last page (fewer results than limit)")
            break

        offset += PAGE_SIZE
        page_num += 1
        await polite_delay(settings.DELAY_BETWEEN_REQUESTS)

    logger.info(f"Found {len(jobs)} US jobs for {company.name}")
    return jobs
