"""
CSV export of scraped jobs, one file per company per day plus a combined file.
"""

import csv
import logging
import re
from datetime import date
from pathlib import Path
from typing import Iterable, Optional

from semijobs.core.models import Job

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "company_name",
    "job_title",
    "location",
    "job_url",
    "posting_date",
    "job_responsibilities",
    "min_education",
    "min_experience",
    "preferred_qualifications",
    "salary_range",
    "job_identification",
    "job_category",
    "degree_level",
    "ecl_gtc_required",
    "scraped_at",
]


def safe_filename(name: str) -> str:
    """'Texas Instruments' -> 'texas_instruments'"""
    name = re.sub(r"[^a-z0-9]+", "_", name.lower())
    return name.strip("_")


def export_jobs_csv(
    jobs: Iterable[Job], label: str, export_dir: Path, today: Optional[date] = None
) -> Optional[Path]:
    """
    Write ``jobs_<label>_<YYYYMMDD>.csv`` into export_dir.
    Returns the file path, or None when there was nothing to write.
    """
    jobs = list(jobs)
    if not jobs:
        return None

    today = today or date.today()
    export_dir.mkdir(parents=True, exist_ok=True)
    path = export_dir / f"jobs_{safe_filename(label)}_{today.strftime('%Y%m%d')}.csv"

    with open(path, "w", newline="", encoding="utf-8") as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=EXPORT_COLUMNS, extrasaction="ignore")
        writer.writeheader()
        for job in jobs:
            writer.writerow(job.to_record())

    logger.info(f"Exported {len(jobs)} jobs to: {path}")
    return path
