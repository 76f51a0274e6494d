"""
Regex section extraction from plain-text job descriptions.
Each field has an ordered pattern list; the first pattern that matches wins.
"""

import logging
import re
from typing import Iterable, Optional

from semijobs.core.models import EMPTY_FIELDS, ExtractedJobFields
from semijobs.extraction.profiles import DEFAULT_PROFILE, ExtractionProfile, as_pairs
from semijobs.extraction.text import normalize, squish, truncate

logger = logging.getLogger(__name__)


def extract_section(text: Optional[str], patterns: Iterable[str]) -> Optional[str]:
    """
    Try each pattern in order (case-insensitive) and return the first hit.

    Returns capture group 1 when the pattern has one and it participated in
    the match, otherwise the whole match, squished and capped at
    MAX_FIELD_LENGTH. None when nothing matches.
    """
    if not text:
        return None

    for pattern in patterns:
        try:
            match = re.search(pattern, text, re.IGNORECASE)
        except re.error as e:
            logger.debug(f"Skipping invalid pattern {pattern!r}: {e}")
            continue

        if not match:
            continue
        if match.re.groups >= 1 and match.group(1) is not None:
            return truncate(squish(match.group(1)))
        return truncate(squish(match.group(0)))

    return None


def extract_job_sections(
    description_text: Optional[str], profile: ExtractionProfile = DEFAULT_PROFILE
) -> ExtractedJobFields:
    """
    Pull responsibilities, education, experience, preferred qualifications
    and salary out of a plain-text description.
    """
    if not description_text:
        return EMPTY_FIELDS

    text = squish(description_text)
    found = {name: normalize(extract_section(text, patterns)) for name, patterns in as_pairs(profile)}

    misses = [name for name, value in found.items() if value is None]
    if misses:
        logger.debug(f"No match for sections: {', '.join(misses)}")

    return ExtractedJobFields(
        responsibilities=found["responsibilities"],
        min_education=found["education"],
        min_experience=found["experience"],
        preferred_qualifications=found["preferred"],
        salary_range=found["salary"],
    )
