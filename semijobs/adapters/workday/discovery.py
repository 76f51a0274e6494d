"""
Job discovery from Workday list pages.
Handles offset pagination, deduplication and stop conditions.
"""

import logging
from typing import List, Set

from playwright.async_api import BrowserContext

from semijobs.config.settings import Settings
from semijobs.core.models import Company, JobListing
from semijobs.core.rate_limit import FETCH_FAILURES, polite_delay, with_retry
from semijobs.browser.pages import fetch_page_html
from semijobs.adapters.workday.pagination import build_page_url
from semijobs.adapters.workday.parsing import has_next_page, parse_job_list
from semijobs.adapters.workday.selectors import JOB_LIST_READY_SELECTOR

logger = logging.getLogger(__name__)


async def discover_jobs(
    context: BrowserContext, company: Company, settings: Settings
) -> List[JobListing]:
    """
    Walk list pages until one comes back empty, has no "next" button, adds
    no new jobs, fails to load, or MAX_PAGES_PER_COMPANY is reached.
    """
    fetch = with_retry(settings.MAX_RETRIES, settings.RETRY_DELAY)(fetch_page_html)
    jobs: List[JobListing] = []
    seen_urls: Set[str] = set()
    page_num = 1

    while page_num <= settings.MAX_PAGES_PER_COMPANY:
        logger.info(f"Scraping page {page_num} for {company.name}")
        url = build_page_url(company.careers_url, page_num, settings.JOBS_PER_PAGE)

        try:
            html = await fetch(context, url, settings, JOB_LIST_READY_SELECTOR)
        except FETCH_FAILURES as e:
            logger.warning(f"Failed to fetch page {page_num} - stopping: {e}")
            break

        page_jobs = parse_job_list(html, company.careers_url, settings)
        if not page_jobs:
            logger.info(f"No jobs found on page {page_num} - stopping")
            break

        new_jobs = [job for job in page_jobs if job.url not in seen_urls]
        if not new_jobs:
            logger.info("No new jobs found, stopping pagination")
            break

        seen_urls.update(job.url for job in new_jobs)
        jobs.extend(new_jobs)

        if not has_next_page(html):
            break

        page_num += 1
        await polite_delay(settings.DELAY_BETWEEN_REQUESTS)

    logger.info(f"Found {len(jobs)} total jobs for {company.name}")
    return jobs
