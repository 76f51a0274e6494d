"""Tests for the scrape orchestration: runs, persistence and exports"""

import asyncio
import os
import sys
from contextlib import asynccontextmanager
from typing import List

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from conftest import FakeContext, FakeResponse
from semijobs.adapters.base import JobPortalAdapter
from semijobs.core.errors import FetchError
from semijobs.core.models import ExtractedJobFields, JobListing
from semijobs.core.runner import Runner
from semijobs.storage.database import get_conn


class StubAdapter(JobPortalAdapter):
    platform = "stub"

    async def discover_jobs(self) -> List[JobListing]:
        base = self.company.careers_url
        return [
            JobListing(title="Yield Engineer", url=f"{base}/job/1", location="Boise, ID"),
            JobListing(title="Process Engineer", url=f"{base}/job/2", location="Boise, ID"),
        ]

    async def scrape_job(self, listing: JobListing) -> ExtractedJobFields:
        return ExtractedJobFields(salary_range="$100,000 - $140,000")


class BrokenAdapter(JobPortalAdapter):
    platform = "broken"

    async def discover_jobs(self) -> List[JobListing]:
        raise FetchError(self.company.careers_url, "HTTP 503")

    async def scrape_job(self, listing: JobListing) -> ExtractedJobFields:
        raise AssertionError("never reached")


class FakeBrowserManager:
    closed = False

    @classmethod
    @asynccontextmanager
    async def session(cls, settings):
        try:
            yield FakeContext()
        finally:
            cls.closed = True


COMPANIES_CSV = (
    "company_name,careers_url,platform,active\n"
    "Stub Micro,https://stub.example.com/careers,workday,TRUE\n"
    "Broken Semi,https://broken.example.com/sites/CX/jobs,oracle,TRUE\n"
    "Custom Devices,https://custom.example.com/jobs,custom,TRUE\n"
)


@pytest.fixture
def runner(settings):
    settings.COMPANIES_FILE.parent.mkdir(parents=True, exist_ok=True)
    settings.COMPANIES_FILE.write_text(COMPANIES_CSV, encoding="utf-8")
    settings.ensure_directories()

    runner = Runner(settings, adapters={"workday": StubAdapter, "oracle": BrokenAdapter})
    runner.conn = get_conn(settings.DB_PATH)
    runner.context = FakeContext()
    yield runner
    if runner.conn is not None:
        runner.conn.close()


def run_statuses(runner):
    rows = runner.conn.execute(
        "SELECT company_name, status, jobs_found, jobs_new FROM vw_scrape_stats ORDER BY run_id"
    ).fetchall()
    return [tuple(row) for row in rows]


def test_scrape_all_records_every_company(runner, settings):
    jobs = asyncio.run(runner.scrape_all(fetch_details=True))

    assert [job.title for job in jobs] == ["Yield Engineer", "Process Engineer"]
    assert all(job.details.salary_range for job in jobs)

    assert run_statuses(runner) == [
        ("Stub Micro", "completed", 2, 2),
        ("Broken Semi", "failed", 0, 0),
        ("Custom Devices", "completed", 0, 0),
    ]

    exports = sorted(path.name for path in settings.EXPORT_DIR.iterdir())
    assert len(exports) == 2, f"expected one company file and the combined file, got {exports}"
    assert exports[0].startswith("jobs_all_companies_")
    assert exports[1].startswith("jobs_stub_micro_")


def test_rescrape_updates_existing_jobs(runner):
    asyncio.run(runner.scrape_all(fetch_details=False))
    asyncio.run(runner.scrape_all(fetch_details=False))

    runs = [row for row in run_statuses(runner) if row[0] == "Stub Micro"]
    assert runs == [("Stub Micro", "completed", 2, 2), ("Stub Micro", "completed", 2, 0)]
    assert runner.conn.execute("SELECT COUNT(*) FROM jobs").fetchone()[0] == 2


def test_robots_disallow_skips_company(runner, settings):
    settings.RESPECT_ROBOTS_TXT = True
    runner.context = FakeContext(
        routes={
            "https://stub.example.com/robots.txt": FakeResponse(
                200, "User-agent: *\nDisallow: /careers\n"
            )
        }
    )
    companies = runner.prepare()

    jobs = asyncio.run(runner.scrape_company(companies[0]))

    assert jobs == []
    assert run_statuses(runner) == [], "a disallowed company gets no scrape run"


def test_run_single_company_by_name(runner, settings, monkeypatch):
    monkeypatch.setattr("semijobs.core.runner.BrowserManager", FakeBrowserManager)
    runner.conn.close()

    jobs = asyncio.run(runner.run("stub micro", fetch_details=False))
    assert len(jobs) == 2
    assert FakeBrowserManager.closed
    assert runner.conn is None, "run() closes its database connection"

    assert asyncio.run(runner.run("Nonexistent Corp")) == []
