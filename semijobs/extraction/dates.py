"""
Posting-date parsing for the formats seen on career sites: ISO dates,
US and European numeric dates, month names, and "Posted 3 Days Ago".
"""

import logging
import re
from datetime import date, datetime
from typing import Optional

from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)

# Tried in order; month/day/year comes before day/month/year
DATE_FORMATS = [
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%d/%m/%Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f%z",
]

RELATIVE_DATE = re.compile(r"(?:(\d+)\+?\s*)?(?<![a-z])(day|week|month)s?\s+ago", re.IGNORECASE)
YESTERDAY = re.compile(r"\byesterday\b", re.IGNORECASE)
TODAY = re.compile(r"\b(?:today|just posted)\b", re.IGNORECASE)

# "Posted 03/15/2026", "Posted on March 15, 2026"
POSTED_PREFIX = re.compile(r"^posted\s+(?:on\s+)?", re.IGNORECASE)


def _parse_absolute(text: str) -> Optional[date]:
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def _parse_relative(text: str, today: date) -> Optional[date]:
    match = RELATIVE_DATE.search(text)
    if match:
        number = int(match.group(1)) if match.group(1) else 1
        unit = match.group(2).lower()
        if unit == "day":
            return today - relativedelta(days=number)
        if unit == "week":
            return today - relativedelta(weeks=number)
        return today - relativedelta(months=number)

    if YESTERDAY.search(text):
        return today - relativedelta(days=1)
    if TODAY.search(text):
        return today
    return None


def parse_date(text: Optional[str], today: Optional[date] = None) -> Optional[date]:
    """
    Parse a posting-date string.

    Absent or empty input gives None. Anything else that cannot be parsed
    falls back to today's date, so a returned date is not proof that one
    was actually found on the page.
    """
    if not text or not isinstance(text, str) or not text.strip():
        return None

    today = today or date.today()
    text = POSTED_PREFIX.sub("", text.strip())
    if text.endswith("Z"):
        text = text[:-1] + "+0000"

    parsed = _parse_absolute(text) or _parse_relative(text, today)
    if parsed:
        return parsed

    logger.debug(f"Could not parse date: {text}")
    return today
