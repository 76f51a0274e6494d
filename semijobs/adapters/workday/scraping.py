"""
Job detail page scraping for Workday.
The description block is read as plain text and run through the section extractor.
"""

import logging

from playwright.async_api import BrowserContext

from semijobs.config.settings import Settings
from semijobs.core.models import EMPTY_FIELDS, ExtractedJobFields
from semijobs.core.rate_limit import with_retry
from semijobs.browser.pages import fetch_page_html
from semijobs.extraction.profiles import ExtractionProfile
from semijobs.extraction.sections import extract_job_sections
from semijobs.adapters.workday.parsing import parse_description_text
from semijobs.adapters.workday.selectors import DESCRIPTION_READY_SELECTOR

logger = logging.getLogger(__name__)


async def scrape_job_details(
    context: BrowserContext, url: str, settings: Settings, profile: ExtractionProfile
) -> ExtractedJobFields:
    """
    Fetch a job detail page and extract its sections.
    Fetch errors propagate after retries; a page without a description gives EMPTY_FIELDS.
    """
    logger.debug(f"Fetching job details: {url}")
    fetch = with_retry(settings.MAX_RETRIES, settings.RETRY_DELAY)(fetch_page_html)
    html = await fetch(context, url, settings, DESCRIPTION_READY_SELECTOR)

    description = parse_description_text(html)
    if not description:
        logger.warning(f"No description block found on {url}")
        return EMPTY_FIELDS

    return extract_job_sections(description, profile)
