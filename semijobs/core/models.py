from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ExtractedJobFields:
    """
    Fields pulled out of a job description. Every value is either None
    ("not found") or a cleaned string of at most 5000 characters.
    The last four are only filled in by the Oracle CX adapter.
    """

    responsibilities: Optional[str] = None
    min_education: Optional[str] = None
    min_experience: Optional[str] = None
    preferred_qualifications: Optional[str] = None
    salary_range: Optional[str] = None
    job_identification: Optional[str] = None
    job_category: Optional[str] = None
    degree_level: Optional[str] = None
    ecl_gtc_required: Optional[str] = None

    def found(self) -> int:
        """Number of fields that were extracted."""
        return sum(1 for value in asdict(self).values() if value is not None)


EMPTY_FIELDS = ExtractedJobFields()


@dataclass
class Company:
    name: str
    careers_url: str
    platform: str  # workday, oracle, custom
    active: bool = True


@dataclass
class JobListing:
    """
    A job as seen on a listing page, before details are fetched.
    """

    title: str
    url: str
    location: Optional[str] = None
    posting_date: Optional[date] = None
    external_id: Optional[str] = None


@dataclass
class Job:
    """
    Canonical job record: listing metadata merged with extracted fields.
    """

    company: str
    title: str
    url: str
    location: Optional[str] = None
    posting_date: Optional[date] = None
    details: ExtractedJobFields = EMPTY_FIELDS
    scraped_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_listing(
        cls, company: str, listing: JobListing, details: ExtractedJobFields = EMPTY_FIELDS
    ) -> "Job":
        return cls(
            company=company,
            title=listing.title,
            url=listing.url,
            location=listing.location,
            posting_date=listing.posting_date,
            details=details,
        )

    def to_record(self) -> Dict[str, Any]:
        """Flat dict keyed by the jobs table / CSV column names."""
        return {
            "company_name": self.company,
            "job_title": self.title,
            "job_url": self.url,
            "location": self.location,
            "job_responsibilities": self.details.responsibilities,
            "min_education": self.details.min_education,
            "min_experience": self.details.min_experience,
            "preferred_qualifications": self.details.preferred_qualifications,
            "salary_range": self.details.salary_range,
            "job_identification": self.details.job_identification,
            "job_category": self.details.job_category,
            "degree_level": self.details.degree_level,
            "ecl_gtc_required": self.details.ecl_gtc_required,
            "posting_date": self.posting_date.isoformat() if self.posting_date else None,
            "scraped_at": self.scraped_at.isoformat(timespec="seconds"),
        }


@dataclass
class SaveResult:
    new: int = 0
    updated: int = 0
