"""
HTML parsing for Workday pages, on the page source captured after rendering.
Pure functions so they can be tested against saved HTML without a browser.
"""

import logging
from typing import List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from semijobs.config.settings import Settings
from semijobs.core.models import JobListing
from semijobs.extraction.dates import parse_date
from semijobs.extraction.text import squish
from semijobs.adapters.workday.selectors import (
    JOB_CARD_SELECTORS,
    JOB_TITLE_SELECTOR,
    JOB_LOCATION_SELECTOR,
    JOB_LINK_SELECTOR,
    POSTED_ON_SELECTOR,
    NEXT_PAGE_SELECTOR,
    DESCRIPTION_SELECTORS,
)

logger = logging.getLogger(__name__)


def _text(card: Tag, selector: str) -> Optional[str]:
    element = card.select_one(selector)
    if element is None:
        return None
    return squish(element.get_text(" ")) or None


def parse_job_card(card: Tag, base_url: str) -> Optional[JobListing]:
    """
    One job card to a JobListing. Cards without a title or link are skipped.
    """
    title = _text(card, JOB_TITLE_SELECTOR)
    link = card.select_one(JOB_LINK_SELECTOR)
    href = link.get("href") if link is not None else None

    if not title or not href:
        return None

    # Workday links are relative to the site root ("/en-US/External/job/...")
    url = href if href.startswith("http") else urljoin(base_url, href)

    return JobListing(
        title=title,
        url=url,
        location=_text(card, JOB_LOCATION_SELECTOR),
        posting_date=parse_date(_text(card, POSTED_ON_SELECTOR)),
    )


def parse_job_list(html: str, base_url: str, settings: Settings) -> List[JobListing]:
    """
    Extract job listings from a rendered Workday list page.
    Titles outside the configured length bounds are dropped.
    """
    soup = BeautifulSoup(html, "html.parser")

    cards: List[Tag] = []
    for selector in JOB_CARD_SELECTORS:
        cards = soup.select(selector)
        if cards:
            logger.debug(f"Found {len(cards)} job cards using selector: {selector}")
            break

    jobs: List[JobListing] = []
    for card in cards:
        listing = parse_job_card(card, base_url)
        if listing is None:
            continue
        if not (
            settings.MIN_JOB_TITLE_LENGTH <= len(listing.title) <= settings.MAX_JOB_TITLE_LENGTH
        ):
            logger.debug(f"Skipping job with out-of-range title length: {listing.title!r}")
            continue
        jobs.append(listing)

    return jobs


def has_next_page(html: str) -> bool:
    """
    True when the pagination "next" button exists and is not disabled.
    """
    soup = BeautifulSoup(html, "html.parser")
    button = soup.select_one(NEXT_PAGE_SELECTOR)
    if button is None:
        return False
    return not button.has_attr("disabled")


def parse_description_text(html: str) -> Optional[str]:
    """
    Plain text of the job description block, one line per block element.
    """
    soup = BeautifulSoup(html, "html.parser")
    for selector in DESCRIPTION_SELECTORS:
        element = soup.select_one(selector)
        if element is not None:
            text = element.get_text("\n").strip()
            return text or None
    return None
