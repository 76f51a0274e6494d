"""
Ordered fallback chains. Each tier is a plain function returning a value or
None; the first non-None value wins.
"""

import logging
from functools import partial
from typing import Any, Callable, Iterable, Optional, TypeVar

from semijobs.extraction.bullets import extract_all_bullets, extract_bullets
from semijobs.extraction.profiles import DISCARD_PARAGRAPHS, STRIP_PHRASES
from semijobs.extraction.prose import extract_prose

logger = logging.getLogger(__name__)

T = TypeVar("T")


def first_match(extractors: Iterable[Callable[..., Optional[T]]], *args: Any) -> Optional[T]:
    """Call each extractor with ``args`` in order, return the first non-None result."""
    for extractor in extractors:
        result = extractor(*args)
        if result is not None:
            return result
    return None


def extract_field(
    description_html: Optional[str],
    heading_patterns: Iterable[str],
    secondary_html: Optional[str] = None,
    strip_phrases: Iterable[str] = STRIP_PHRASES,
    discard_paragraphs: Iterable[str] = DISCARD_PARAGRAPHS,
) -> Optional[str]:
    """
    Three tiers, in this order:
      1. bullets under one of the field's headings in the description
      2. loose pass over the secondary HTML (every list item), when given
      3. prose paragraphs of the description, boilerplate removed
    """
    heading_patterns = list(heading_patterns)
    tiers = [
        partial(extract_bullets, description_html, heading_patterns),
        partial(extract_all_bullets, secondary_html),
        partial(extract_prose, description_html, strip_phrases, discard_paragraphs),
    ]
    result = first_match(tiers)
    if result is None:
        logger.debug("All extraction tiers came up empty")
    return result
