"""
Prose fallback: when a posting has no bulleted section, keep its
substantive paragraphs and drop the boilerplate around them.
"""

import logging
import re
from typing import Iterable, List, Optional

from bs4 import BeautifulSoup

from semijobs.extraction.profiles import DISCARD_PARAGRAPHS, STRIP_PHRASES
from semijobs.extraction.text import MAX_FIELD_LENGTH, squish, truncate

logger = logging.getLogger(__name__)

PARAGRAPH_SELECTOR = "p, div > span, li"
MIN_PARAGRAPH_LENGTH = 20
MIN_PROSE_LENGTH = 30


def _compile_all(patterns: Iterable[str]) -> List[re.Pattern]:
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern, re.IGNORECASE))
        except re.error as e:
            logger.debug(f"Skipping invalid boilerplate pattern {pattern!r}: {e}")
    return compiled


def extract_prose(
    html: Optional[str],
    strip_phrases: Iterable[str] = STRIP_PHRASES,
    discard_paragraphs: Iterable[str] = DISCARD_PARAGRAPHS,
) -> Optional[str]:
    """
    Paragraph text of the description with boilerplate removed, paragraphs
    separated by a blank line. None if nothing meaningful is left.
    """
    if not html or not isinstance(html, str):
        return None

    try:
        soup = BeautifulSoup(f"<div>{html}</div>", "html.parser")
        paragraphs = [squish(el.get_text(" ")) for el in soup.select(PARAGRAPH_SELECTOR)]
    except Exception as e:
        logger.debug(f"Prose extraction could not parse HTML: {e}")
        return None

    paragraphs = [p for p in paragraphs if p]
    if not paragraphs:
        return None

    for phrase in _compile_all(strip_phrases):
        paragraphs = [phrase.sub("", p) for p in paragraphs]
    paragraphs = [squish(p) for p in paragraphs]

    discards = _compile_all(discard_paragraphs)
    paragraphs = [p for p in paragraphs if not any(d.search(p) for d in discards)]

    # Short leftovers are headings or layout artifacts
    paragraphs = [p for p in paragraphs if len(p) >= MIN_PARAGRAPH_LENGTH]
    if not paragraphs:
        return None

    result = truncate("\n\n".join(paragraphs), MAX_FIELD_LENGTH)
    if len(result) < MIN_PROSE_LENGTH:
        return None
    return result
