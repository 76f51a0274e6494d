"""
Whitespace and control-character normalization for extracted job fields.
No scraping logic here, only text cleanup shared by the extraction tiers.
"""

import re
from typing import Optional

MAX_FIELD_LENGTH = 5000
MIN_FIELD_LENGTH = 3

_WHITESPACE = re.compile(r"\s+")
_INLINE_WHITESPACE = re.compile(r"[^\S\n]+")
_CONTROL_CHARS = re.compile(r"[\x01-\x1f\x7f]")
_CONTROL_CHARS_NO_NEWLINE = re.compile(r"[\x01-\x09\x0b-\x1f\x7f]")


def squish(text: str) -> str:
    """Collapse whitespace runs to a single space and trim."""
    return _WHITESPACE.sub(" ", text).strip()


def truncate(text: str, limit: int = MAX_FIELD_LENGTH) -> str:
    """Hard cap at ``limit`` characters, no ellipsis."""
    if len(text) > limit:
        return text[:limit].rstrip()
    return text


def normalize(raw: Optional[str]) -> Optional[str]:
    """
    Normalize an extracted value.

    Returns None for absent input, empty input or anything shorter than
    MIN_FIELD_LENGTH after cleanup. Never raises.
    """
    if not raw or not isinstance(raw, str):
        return None

    text = raw.replace("\x00", "")
    text = _CONTROL_CHARS.sub(" ", text)
    text = truncate(squish(text))

    if len(text) < MIN_FIELD_LENGTH:
        return None
    return text


def sanitize_text(text: Optional[str], keep_newlines: bool = False) -> Optional[str]:
    """
    Make a value safe for database insertion.

    With keep_newlines the line structure of bulleted fields survives; each
    line is squished and blank lines are collapsed.
    """
    if text is None:
        return None

    text = text.replace("\x00", "")
    if not keep_newlines:
        return squish(_CONTROL_CHARS.sub(" ", text))

    text = _CONTROL_CHARS_NO_NEWLINE.sub(" ", text)
    lines = [_INLINE_WHITESPACE.sub(" ", line).strip() for line in text.split("\n")]
    return re.sub(r"\n{3,}", "\n\n", "\n".join(lines)).strip()
