"""Tests for SQLite persistence, CSV export and the companies file"""

import csv
import os
import sys
from datetime import date

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from semijobs.core.errors import ConfigurationError
from semijobs.core.models import Company, ExtractedJobFields, Job, SaveResult
from semijobs.storage.companies import load_companies
from semijobs.storage.database import (
    complete_scrape_run,
    get_company_id,
    get_conn,
    init_db,
    save_jobs,
    start_scrape_run,
    sync_companies,
)
from semijobs.storage.export import export_jobs_csv, safe_filename

COMPANY = Company("NXP Semiconductors", "https://nxp.wd3.myworkdayjobs.com/careers", "workday")


def make_job(url: str, title: str = "Firmware Engineer", **details) -> Job:
    return Job(
        company=COMPANY.name,
        title=title,
        url=url,
        location="Austin, TX",
        posting_date=date(2026, 10, 1),
        details=ExtractedJobFields(**details),
    )


@pytest.fixture
def conn(tmp_path):
    conn = get_conn(tmp_path / "data" / "jobs.db")
    init_db(conn)
    sync_companies(conn, [COMPANY])
    yield conn
    conn.close()


def test_init_db_is_repeatable(conn):
    init_db(conn)
    views = {
        row["name"]
        for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'view'")
    }
    assert views == {"vw_jobs_full", "vw_scrape_stats"}


def test_sync_companies_only_adds_new(conn):
    assert sync_companies(conn, [COMPANY]) == 0
    other = Company("Texas Instruments", "https://example.com/sites/CX/jobs", "oracle")
    assert sync_companies(conn, [COMPANY, other]) == 1
    assert get_company_id(conn, "Texas Instruments") is not None
    assert get_company_id(conn, "Unknown Corp") is None


def test_save_jobs_upserts_by_url(conn):
    run_id = start_scrape_run(conn, COMPANY.name)
    first = save_jobs(
        conn,
        [make_job("https://x/job/1"), make_job("https://x/job/2")],
        COMPANY.name,
        run_id,
    )
    assert first == SaveResult(new=2, updated=0)

    run_id = start_scrape_run(conn, COMPANY.name)
    second = save_jobs(
        conn,
        [
            make_job("https://x/job/2", title="Senior Firmware Engineer", salary_range="$1 - $2"),
            make_job("https://x/job/3"),
        ],
        COMPANY.name,
        run_id,
    )
    assert second == SaveResult(new=1, updated=1)

    rows = conn.execute(
        "SELECT job_title, salary_range, scrape_run_id FROM jobs WHERE job_url = ?",
        ("https://x/job/2",),
    ).fetchall()
    assert len(rows) == 1
    assert rows[0]["job_title"] == "Senior Firmware Engineer"
    assert rows[0]["salary_range"] == "$1 - $2"
    assert rows[0]["scrape_run_id"] == run_id
    assert conn.execute("SELECT COUNT(*) FROM jobs").fetchone()[0] == 3


def test_save_jobs_sanitizes_text(conn):
    run_id = start_scrape_run(conn, COMPANY.name)
    job = make_job(
        "https://x/job/9",
        title="  Design\x00 Engineer\t",
        responsibilities="Tape out  chips\n\n\n\nReview\x07 layouts",
    )
    save_jobs(conn, [job], COMPANY.name, run_id)

    row = conn.execute("SELECT * FROM vw_jobs_full").fetchone()
    assert row["job_title"] == "Design Engineer"
    assert row["job_responsibilities"] == "Tape out chips\n\nReview layouts"
    assert row["company_name"] == COMPANY.name
    assert row["posting_date"] == "2026-10-01"


def test_scrape_run_lifecycle(conn):
    run_id = start_scrape_run(conn, COMPANY.name)
    row = conn.execute("SELECT status FROM scrape_runs WHERE run_id = ?", (run_id,)).fetchone()
    assert row["status"] == "running"

    complete_scrape_run(conn, run_id, 5, SaveResult(new=3, updated=2))
    stats = conn.execute("SELECT * FROM vw_scrape_stats WHERE run_id = ?", (run_id,)).fetchone()
    assert stats["status"] == "completed"
    assert (stats["jobs_found"], stats["jobs_new"], stats["jobs_updated"]) == (5, 3, 2)
    assert stats["duration_seconds"] >= 0
    assert stats["company_name"] == COMPANY.name

    failed = start_scrape_run(conn, COMPANY.name)
    complete_scrape_run(conn, failed, status="failed", error="Timeout 20000ms exceeded")
    stats = conn.execute("SELECT * FROM vw_scrape_stats WHERE run_id = ?", (failed,)).fetchone()
    assert stats["status"] == "failed"
    assert stats["error_message"] == "Timeout 20000ms exceeded"


def test_safe_filename():
    assert safe_filename("Texas Instruments") == "texas_instruments"
    assert safe_filename("ALL_COMPANIES") == "all_companies"
    assert safe_filename(" AT&T / Labs ") == "at_t_labs"


def test_export_jobs_csv(tmp_path):
    jobs = [make_job("https://x/job/1", salary_range="$95,000 - $135,000")]
    path = export_jobs_csv(jobs, COMPANY.name, tmp_path, today=date(2026, 10, 16))

    assert path == tmp_path / "jobs_nxp_semiconductors_20261016.csv"
    with open(path, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 1
    assert rows[0]["job_url"] == "https://x/job/1"
    assert rows[0]["salary_range"] == "$95,000 - $135,000"
    assert rows[0]["min_education"] == ""


def test_export_skips_empty_list(tmp_path):
    assert export_jobs_csv([], "ALL_COMPANIES", tmp_path) is None
    assert list(tmp_path.iterdir()) == []


def test_load_companies_keeps_active_rows(tmp_path):
    path = tmp_path / "companies.csv"
    path.write_text(
        "company_name,careers_url,platform,active\n"
        "Applied Materials,https://amat.wd1.myworkdayjobs.com/External,workday,TRUE\n"
        "Old Corp,https://old.example.com,custom,FALSE\n"
        "Texas Instruments,https://edbz.fa.us2.oraclecloud.com/sites/CX/jobs,Oracle,\n",
        encoding="utf-8",
    )
    companies = load_companies(path)
    assert [c.name for c in companies] == ["Applied Materials", "Texas Instruments"]
    assert companies[1].platform == "oracle"


def test_load_companies_errors(tmp_path):
    with pytest.raises(ConfigurationError):
        load_companies(tmp_path / "missing.csv")

    path = tmp_path / "companies.csv"
    path.write_text("name,url\nA,https://a\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_companies(path)
