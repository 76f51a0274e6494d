"""
SQLite persistence: companies, jobs and scrape-run bookkeeping.
Jobs are keyed by URL; re-scraping a posting updates it in place.
"""

import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional

from semijobs.core.models import Company, Job, SaveResult
from semijobs.extraction.text import sanitize_text

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS companies (
  company_id INTEGER PRIMARY KEY AUTOINCREMENT,
  company_name TEXT NOT NULL UNIQUE,
  careers_url TEXT NOT NULL,
  platform TEXT NOT NULL,
  active BOOLEAN DEFAULT 1,
  created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
  updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS scrape_runs (
  run_id INTEGER PRIMARY KEY AUTOINCREMENT,
  run_date TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
  company_id INTEGER,
  jobs_found INTEGER DEFAULT 0,
  jobs_new INTEGER DEFAULT 0,
  jobs_updated INTEGER DEFAULT 0,
  status TEXT DEFAULT 'running',
  error_message TEXT,
  duration_seconds INTEGER,
  FOREIGN KEY (company_id) REFERENCES companies (company_id)
);

CREATE TABLE IF NOT EXISTS jobs (
  job_id INTEGER PRIMARY KEY AUTOINCREMENT,
  company_id INTEGER NOT NULL,
  job_title TEXT NOT NULL,
  job_url TEXT UNIQUE NOT NULL,
  location TEXT,
  job_responsibilities TEXT,
  min_education TEXT,
  min_experience TEXT,
  preferred_qualifications TEXT,
  salary_range TEXT,
  job_identification TEXT,
  job_category TEXT,
  degree_level TEXT,
  ecl_gtc_required TEXT,
  posting_date DATE,
  scrape_run_id INTEGER NOT NULL,
  created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
  updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
  FOREIGN KEY (company_id) REFERENCES companies (company_id),
  FOREIGN KEY (scrape_run_id) REFERENCES scrape_runs (run_id)
);

CREATE INDEX IF NOT EXISTS idx_jobs_company ON jobs(company_id);
CREATE INDEX IF NOT EXISTS idx_jobs_location ON jobs(location);
CREATE INDEX IF NOT EXISTS idx_jobs_posting_date ON jobs(posting_date);
CREATE INDEX IF NOT EXISTS idx_jobs_title ON jobs(job_title);
CREATE INDEX IF NOT EXISTS idx_scrape_runs_date ON scrape_runs(run_date);
CREATE INDEX IF NOT EXISTS idx_scrape_runs_company ON scrape_runs(company_id);

CREATE VIEW IF NOT EXISTS vw_jobs_full AS
SELECT
  j.job_id,
  c.company_name,
  j.job_title,
  j.location,
  j.job_responsibilities,
  j.min_education,
  j.min_experience,
  j.preferred_qualifications,
  j.salary_range,
  j.job_identification,
  j.job_category,
  j.degree_level,
  j.ecl_gtc_required,
  j.posting_date,
  j.job_url,
  j.created_at,
  j.updated_at
FROM jobs j
JOIN companies c ON j.company_id = c.company_id;

CREATE VIEW IF NOT EXISTS vw_scrape_stats AS
SELECT
  sr.run_id,
  c.company_name,
  sr.run_date,
  sr.jobs_found,
  sr.jobs_new,
  sr.jobs_updated,
  sr.status,
  sr.duration_seconds,
  sr.error_message
FROM scrape_runs sr
LEFT JOIN companies c ON sr.company_id = c.company_id
ORDER BY sr.run_date DESC;
"""

# Columns written for every job, in insert order after company_id
JOB_COLUMNS = [
    "job_title",
    "job_url",
    "location",
    "job_responsibilities",
    "min_education",
    "min_experience",
    "preferred_qualifications",
    "salary_range",
    "job_identification",
    "job_category",
    "degree_level",
    "ecl_gtc_required",
    "posting_date",
]

# Multi-line values (bullet lists, prose paragraphs)
MULTILINE_COLUMNS = {"job_responsibilities", "min_education", "preferred_qualifications"}

_RUN_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_conn(db_path: Path) -> sqlite3.Connection:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


def init_db(conn: sqlite3.Connection) -> None:
    logger.info("Initializing database")
    conn.executescript(SCHEMA)
    conn.commit()


def sync_companies(conn: sqlite3.Connection, companies: Iterable[Company]) -> int:
    """Insert companies not yet in the database. Returns how many were added."""
    added = 0
    for company in companies:
        if get_company_id(conn, company.name) is not None:
            continue
        conn.execute(
            "INSERT INTO companies (company_name, careers_url, platform, active) "
            "VALUES (?, ?, ?, ?)",
            (company.name, company.careers_url, company.platform, int(company.active)),
        )
        logger.info(f"Added company to database: {company.name}")
        added += 1
    conn.commit()
    return added


def get_company_id(conn: sqlite3.Connection, company_name: str) -> Optional[int]:
    row = conn.execute(
        "SELECT company_id FROM companies WHERE company_name = ?", (company_name,)
    ).fetchone()
    return row["company_id"] if row else None


def start_scrape_run(conn: sqlite3.Connection, company_name: str) -> int:
    """Record a new run in the 'running' state and return its id."""
    cursor = conn.execute(
        "INSERT INTO scrape_runs (company_id, run_date, status) VALUES (?, ?, 'running')",
        (get_company_id(conn, company_name), datetime.now().strftime(_RUN_DATE_FORMAT)),
    )
    conn.commit()
    return cursor.lastrowid


def complete_scrape_run(
    conn: sqlite3.Connection,
    run_id: int,
    jobs_found: int = 0,
    result: Optional[SaveResult] = None,
    status: str = "completed",
    error: Optional[str] = None,
) -> None:
    """Close a run with its counts, final status and duration in seconds."""
    result = result or SaveResult()
    row = conn.execute(
        "SELECT run_date FROM scrape_runs WHERE run_id = ?", (run_id,)
    ).fetchone()

    duration = None
    if row and row["run_date"]:
        started = datetime.strptime(row["run_date"], _RUN_DATE_FORMAT)
        duration = int((datetime.now() - started).total_seconds())

    conn.execute(
        "UPDATE scrape_runs SET jobs_found = ?, jobs_new = ?, jobs_updated = ?, "
        "status = ?, error_message = ?, duration_seconds = ? WHERE run_id = ?",
        (jobs_found, result.new, result.updated, status, error, duration, run_id),
    )
    conn.commit()


def _job_values(job: Job) -> List:
    record = job.to_record()
    return [
        sanitize_text(record[column], keep_newlines=column in MULTILINE_COLUMNS)
        if column != "posting_date"
        else record[column]
        for column in JOB_COLUMNS
    ]


def save_jobs(
    conn: sqlite3.Connection, jobs: Iterable[Job], company_name: str, run_id: int
) -> SaveResult:
    """
    Upsert jobs by URL. New URLs are inserted, known URLs get every field
    overwritten and updated_at refreshed.
    """
    result = SaveResult()
    company_id = get_company_id(conn, company_name)

    for job in jobs:
        values = _job_values(job)
        existing = conn.execute(
            "SELECT job_id FROM jobs WHERE job_url = ?", (job.url,)
        ).fetchone()

        if existing is None:
            columns = ["company_id"] + JOB_COLUMNS + ["scrape_run_id"]
            placeholders = ", ".join(["?"] * len(columns))
            conn.execute(
                f"INSERT INTO jobs ({', '.join(columns)}) VALUES ({placeholders})",
                [company_id] + values + [run_id],
            )
            result.new += 1
        else:
            assignments = ", ".join(f"{c} = ?" for c in JOB_COLUMNS)
            conn.execute(
                f"UPDATE jobs SET {assignments}, scrape_run_id = ?, "
                f"updated_at = CURRENT_TIMESTAMP WHERE job_id = ?",
                values + [run_id, existing["job_id"]],
            )
            result.updated += 1

    conn.commit()
    logger.info(f"Saved {result.new} new jobs and updated {result.updated} existing jobs")
    return result
