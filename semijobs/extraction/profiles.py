"""
Extraction configuration: ordered pattern tables, heading lists and
boilerplate lists. Patterns are data, the extractors never hard-code them,
so a company can override any list without touching extractor logic.

Order inside every list matters: the first pattern that matches wins, so
labeled sections come before loose keyword heuristics.
"""

import json
import logging
import re
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from semijobs.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

SECTION_FIELDS = ("responsibilities", "education", "experience", "preferred", "salary")

SECTION_PATTERNS: Dict[str, List[str]] = {
    "responsibilities": [
        r"Responsibilities:?(.+?)(?=Qualifications|Requirements|Education|Experience|$)",
        r"Job Description:?(.+?)(?=Qualifications|Requirements|Education|$)",
        r"What You[’']ll Do:?(.+?)(?=What You[’']ll Need|Qualifications|$)",
    ],
    "education": [
        r"Minimum Education:?(.+?)(?=Experience|Preferred|Qualifications|Skills|$)",
        r"Required Education:?(.+?)(?=Experience|Preferred|Qualifications|Skills|$)",
        r"Education:?(.+?)(?=Experience|Qualifications|Skills|$)",
        r"(?:Bachelor[’']?s|Master[’']?s|Ph\.?D\.?|Associate[’']?s).{0,100}?(?:degree|required)",
        r"\b(?:BS|MS|PhD)\b.{0,50}?\bin\b.{0,50}?(?:Engineering|Science|Computer)",
    ],
    "experience": [
        r"Minimum Experience:?(.+?)(?=Education|Preferred|Skills|$)",
        r"Required Experience:?(.+?)(?=Education|Preferred|Skills|$)",
        r"Experience:?(.+?)(?=Education|Skills|Qualifications|Preferred|$)",
        r"\d+\+?\s*years?.{0,100}?experience",
    ],
    "preferred": [
        r"Preferred Qualifications:?(.+?)(?=Salary|Benefits|Equal|$)",
        r"Nice to Have:?(.+?)(?=Salary|Benefits|$)",
        r"Preferred:?(.+?)(?=Salary|Benefits|Equal|$)",
    ],
    "salary": [
        r"Salary Range:?(.+?)(?=Benefits|Equal|$)",
        r"Compensation:?(.+?)(?=Benefits|Equal|$)",
        r"\$[0-9,]+\s*[-–]\s*\$[0-9,]+",
        r"\$[0-9,.]+K?\s*[-–]\s*\$[0-9,.]+K?",
    ],
}

RESPONSIBILITY_HEADINGS = [
    r"Responsibilities\s+include\s*:?",
    r"Specific\s+responsibilities\s+(?:could|may|will)\s+include\s*:?",
    r"Key\s+Responsibilities\s*:?",
    r"responsibilities\s+of\s+a\s+[^:]+\s+in\s+this\s+role\s+include\s*:?",
    r"you\s+will\s+be\s+responsible\s+for\s*:?",
    r"About\s+the\s+job",
]

MINIMUM_REQUIREMENT_HEADINGS = [r"Minimum\s+requirements\s*:?"]

PREFERRED_HEADINGS = [r"Preferred\s+qualifications\s*:?"]

SALARY_PATTERNS = [r"\$[0-9,]+\s*[-–]\s*\$[0-9,]+"]

# Removed from inside paragraphs (substring removal)
STRIP_PHRASES: List[str] = []

# Paragraphs matching any of these are dropped whole
DISCARD_PARAGRAPHS = [
    r"^[^.]{0,80}\bis an equal opportunity",
    r"^All qualified applicants will receive",
    r"^If you are interested in this position",
    r"^About [A-Z][\w&.,' -]{0,60}$",
    r"^\s*$",
]

EXPORT_CONTROL_PATTERN = r"export control|export license|\bECL\b|\bGTC\b"


@dataclass(frozen=True)
class ExtractionProfile:
    """
    Everything the extractors need to know about one company's postings.
    """

    section_patterns: Dict[str, List[str]] = field(
        default_factory=lambda: {k: list(v) for k, v in SECTION_PATTERNS.items()}
    )
    responsibility_headings: List[str] = field(
        default_factory=lambda: list(RESPONSIBILITY_HEADINGS)
    )
    minimum_requirement_headings: List[str] = field(
        default_factory=lambda: list(MINIMUM_REQUIREMENT_HEADINGS)
    )
    preferred_headings: List[str] = field(default_factory=lambda: list(PREFERRED_HEADINGS))
    salary_patterns: List[str] = field(default_factory=lambda: list(SALARY_PATTERNS))
    strip_phrases: List[str] = field(default_factory=lambda: list(STRIP_PHRASES))
    discard_paragraphs: List[str] = field(default_factory=lambda: list(DISCARD_PARAGRAPHS))
    export_control_pattern: str = EXPORT_CONTROL_PATTERN

    def patterns_for(self, section: str) -> List[str]:
        return self.section_patterns.get(section, [])


DEFAULT_PROFILE = ExtractionProfile()

COMPANY_PROFILES: Dict[str, ExtractionProfile] = {
    "texas_instruments": replace(
        DEFAULT_PROFILE,
        strip_phrases=[
            r"Change the world\.\s*Love your job\.\s*",
            r"Put your talent to work with us[^.!]*[.!]\s*",
            r"Texas Instruments will not sponsor[^.]*\.\s*",
            r"TI will not sponsor[^.]*\.\s*",
        ],
        discard_paragraphs=[
            r"^Texas Instruments Incorporated \(TI\) is a global semiconductor",
            r"^Texas Instruments is an equal opportunity",
            r"^Why TI\s*$",
            r"^About Texas Instruments\s*$",
        ]
        + DISCARD_PARAGRAPHS,
    ),
}


def profile_key(company_name: str) -> str:
    """'Texas Instruments' -> 'texas_instruments'"""
    key = re.sub(r"[^a-z0-9]+", "_", company_name.lower())
    return key.strip("_")


def _apply_overrides(profile: ExtractionProfile, overrides: Dict) -> ExtractionProfile:
    known = {f.name for f in fields(ExtractionProfile)}
    changes = {}
    for name, value in overrides.items():
        if name not in known:
            logger.warning(f"Ignoring unknown extraction profile key: {name}")
            continue
        if name == "section_patterns":
            merged = dict(profile.section_patterns)
            merged.update(value)
            value = merged
        changes[name] = value
    return replace(profile, **changes)


def load_profile_overrides(path: Path) -> Dict[str, Dict]:
    """
    Read per-company overrides from a JSON file shaped like
    {"texas_instruments": {"responsibility_headings": [...]}}.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read extraction profiles from {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Extraction profiles file must hold an object: {path}")
    return data


def get_profile(
    company_name: str, overrides_file: Optional[Path] = None
) -> ExtractionProfile:
    """
    Resolve the extraction profile for a company: built-in registry first,
    then any overrides from the JSON file.
    """
    key = profile_key(company_name)
    profile = COMPANY_PROFILES.get(key, DEFAULT_PROFILE)

    if overrides_file:
        overrides = load_profile_overrides(overrides_file)
        if key in overrides:
            logger.info(f"Applying extraction overrides for {company_name}")
            profile = _apply_overrides(profile, overrides[key])

    return profile


def as_pairs(profile: ExtractionProfile) -> Tuple[Tuple[str, List[str]], ...]:
    """Section name and pattern list pairs, in SECTION_FIELDS order."""
    return tuple((name, profile.patterns_for(name)) for name in SECTION_FIELDS)
