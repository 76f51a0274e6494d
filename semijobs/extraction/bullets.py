"""
Bulleted-section extraction from description HTML.

Finds a heading in the plain text, goes back to the HTML to cut out the
fragment that follows it (up to the next bold heading) and returns the
<li> items of that fragment, one per line.
"""

import logging
import re
from typing import Iterable, List, Optional

from bs4 import BeautifulSoup

from semijobs.extraction.text import squish, truncate

logger = logging.getLogger(__name__)

_TAG = re.compile(r"<[^>]+>")
_ENTITY = re.compile(r"&[a-zA-Z]+;")

# Whitespace inside a heading may also be inline markup:
# "<b>Key</b> <b>Responsibilities</b>". Block tags (<ul>, <li>, <p>) are never
# part of a heading.
_INLINE_TAG = r"</?(?:strong|b|em|i|u|span|font|a)\b[^>]*>"
_GAP_PLUS = r"(?:\s|&nbsp;|" + _INLINE_TAG + r")+"
_GAP_STAR = r"(?:\s|&nbsp;|" + _INLINE_TAG + r")*"

# Start of the next section: bold/strong text beginning with a capital letter
NEXT_SECTION = re.compile(r"<(?i:strong|b)(?:\s[^>]*)?>\s*[A-Z][^<]{2,}")


def html_to_text(html: str) -> str:
    """Strip tags and named entities, collapse whitespace."""
    text = _TAG.sub(" ", html)
    text = _ENTITY.sub(" ", text)
    return squish(text)


def _tag_tolerant(heading_pattern: str) -> str:
    return heading_pattern.replace(r"\s+", _GAP_PLUS).replace(r"\s*", _GAP_STAR)


def _split_patterns(heading_pattern: str) -> List[str]:
    tolerant = _tag_tolerant(heading_pattern)
    return [
        # Heading wrapped in tags: <p><strong>Key Responsibilities:</strong></p>
        r"(?:<[^>]*>\s*)*" + tolerant + r"\s*(?:</[^>]*>\s*)*(?:&nbsp;)?\s*(?:</[^>]*>)*",
        # Heading in running text followed by closing tags, then the list
        heading_pattern + r"\s*(?:&nbsp;)?\s*(?:</[^>]*>\s*)*",
    ]


def _list_items(fragment: str) -> List[str]:
    soup = BeautifulSoup(f"<div>{fragment}</div>", "html.parser")
    items = [squish(li.get_text(" ")) for li in soup.find_all("li")]
    return [item for item in items if item]


def _section_after(html: str, split_pattern: str) -> Optional[str]:
    """HTML between the first heading occurrence and the next one (or the end)."""
    splitter = re.compile(split_pattern, re.IGNORECASE)
    match = splitter.search(html)
    if not match or match.end() == match.start():
        return None

    after = html[match.end():]
    following = splitter.search(after)
    if following and following.end() > following.start():
        after = after[: following.start()]
    return after


def _bullets_for_heading(html: str, plain_text: str, heading_pattern: str) -> Optional[str]:
    if not re.search(heading_pattern, plain_text, re.IGNORECASE):
        return None

    for split_pattern in _split_patterns(heading_pattern):
        after_heading = _section_after(html, split_pattern)
        if after_heading is None:
            continue

        next_section = NEXT_SECTION.search(after_heading)
        if next_section:
            after_heading = after_heading[: next_section.start()]

        items = _list_items(after_heading)
        if items:
            return truncate("\n".join(items))

    return None


def extract_bullets(html: Optional[str], heading_patterns: Iterable[str]) -> Optional[str]:
    """
    Return the list items under the first heading pattern that has any,
    joined by newlines. None when no heading yields items or the HTML
    cannot be processed.
    """
    if not html or not isinstance(html, str):
        return None

    plain_text = html_to_text(html)
    for heading_pattern in heading_patterns:
        try:
            result = _bullets_for_heading(html, plain_text, heading_pattern)
        except Exception as e:
            logger.debug(f"Bullet extraction failed for heading {heading_pattern!r}: {e}")
            continue
        if result:
            return result

    logger.debug("No bulleted section found for any heading pattern")
    return None


def extract_all_bullets(html: Optional[str]) -> Optional[str]:
    """
    Loose pass: every non-empty list item up to the first bold heading that
    follows a list, no heading required.
    """
    if not html or not isinstance(html, str):
        return None

    fragment = html
    first_item = re.search(r"<li\b", html, re.IGNORECASE)
    if first_item:
        next_section = NEXT_SECTION.search(html, first_item.end())
        if next_section:
            fragment = html[: next_section.start()]

    try:
        items = _list_items(fragment)
    except Exception as e:
        logger.debug(f"Loose bullet extraction failed: {e}")
        return None

    if not items:
        return None
    return truncate("\n".join(items))
