"""
Parsing of Oracle CX requisition JSON into listings and extracted fields.
"""

import logging
import re
from typing import Any, Dict, Optional

from semijobs.core.models import ExtractedJobFields, JobListing
from semijobs.extraction.bullets import extract_bullets
from semijobs.extraction.chain import extract_field
from semijobs.extraction.dates import parse_date
from semijobs.extraction.profiles import DEFAULT_PROFILE, ExtractionProfile
from semijobs.extraction.sections import extract_section
from semijobs.extraction.text import normalize, squish, truncate
from semijobs.adapters.oracle.api import build_job_url
from semijobs.adapters.oracle.config import US_COUNTRY_CODE, US_FALLBACK_LOCATION

logger = logging.getLogger(__name__)


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def format_us_location(job: Dict[str, Any]) -> Optional[str]:
    """
    Location of the first US work location as "City, State", city, state or
    "United States". None when the job has no US work location.
    """
    for work_location in job.get("workLocation") or []:
        if work_location.get("Country") != US_COUNTRY_CODE:
            continue

        city = _clean(work_location.get("TownOrCity"))
        state = _clean(work_location.get("Region2"))
        if city and state:
            return f"{city}, {state}"
        return city or state or US_FALLBACK_LOCATION

    return None


def parse_requisition(job: Dict[str, Any], jobs_base_url: str) -> Optional[JobListing]:
    """
    One requisitionList entry to a JobListing. Non-US and untitled jobs give None.
    """
    location = format_us_location(job)
    if location is None:
        return None

    title = _clean(job.get("Title"))
    job_id = _clean(job.get("Id"))
    if not title or not job_id:
        return None

    return JobListing(
        title=title,
        url=build_job_url(jobs_base_url, job_id),
        location=location,
        posting_date=parse_date(job.get("PostedDate")),
        external_id=job_id,
    )


def _optional_str(value: Any) -> Optional[str]:
    # No minimum length: two-letter codes such as "IT" are kept
    text = truncate(squish(_clean(value)))
    return text or None


def export_control_flag(org_description: Optional[str], pattern: str) -> Optional[str]:
    """'Yes' / 'No' for export-control language, None without an organization description."""
    if not org_description:
        return None
    return "Yes" if re.search(pattern, org_description, re.IGNORECASE) else "No"


def parse_job_details(
    detail: Dict[str, Any], profile: ExtractionProfile = DEFAULT_PROFILE
) -> ExtractedJobFields:
    """
    Map a recruitingCEJobRequisitionDetails document to ExtractedJobFields.

    Responsibilities come from the description bullets, then the separate
    responsibilities HTML, then description prose. Minimum requirements and
    preferred qualifications are bullet lists in the qualifications HTML.
    """
    desc_html = detail.get("ExternalDescriptionStr")
    resp_html = detail.get("ExternalResponsibilitiesStr")
    qual_html = detail.get("ExternalQualificationsStr")

    responsibilities = extract_field(
        desc_html,
        profile.responsibility_headings,
        secondary_html=resp_html,
        strip_phrases=profile.strip_phrases,
        discard_paragraphs=profile.discard_paragraphs,
    )

    salary = None
    for html in (desc_html, qual_html):
        salary = normalize(extract_section(html, profile.salary_patterns))
        if salary:
            break

    return ExtractedJobFields(
        responsibilities=responsibilities,
        min_education=extract_bullets(qual_html, profile.minimum_requirement_headings),
        min_experience=None,
        preferred_qualifications=extract_bullets(qual_html, profile.preferred_headings),
        salary_range=salary,
        job_identification=_optional_str(detail.get("Id")),
        job_category=_optional_str(detail.get("Category")),
        degree_level=_optional_str(detail.get("StudyLevel")),
        ecl_gtc_required=export_control_flag(
            detail.get("OrganizationDescriptionStr"), profile.export_control_pattern
        ),
    )
