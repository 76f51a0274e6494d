"""Tests for Workday list/detail parsing, pagination and discovery"""

import asyncio
import os
import sys
from datetime import date

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from conftest import FakeContext
from semijobs.adapters.workday.adapter import WorkdayAdapter
from semijobs.adapters.workday.discovery import discover_jobs
from semijobs.adapters.workday.pagination import build_page_url
from semijobs.adapters.workday.parsing import (
    has_next_page,
    parse_description_text,
    parse_job_list,
)
from semijobs.core.models import Company
from semijobs.extraction.profiles import DEFAULT_PROFILE

BASE_URL = "https://amat.wd1.myworkdayjobs.com/External"


def job_card(
    title: str, slug: str, location: str = "Santa Clara, CA", posted: str = "Posted 03/15/2026"
) -> str:
    return f"""
    <li data-automation-id="jobPostingItem">
      <h3><a data-automation-id="jobTitle" href="/External/job/{slug}">{title}</a></h3>
      <div data-automation-id="locations"><dd>{location}</dd></div>
      <div data-automation-id="postedOn"><dd>{posted}</dd></div>
    </li>
    """


def list_page(cards, next_enabled: bool = True) -> str:
    button = (
        '<button data-uxi-widget-type="paginationNext">next</button>'
        if next_enabled
        else '<button data-uxi-widget-type="paginationNext" disabled>next</button>'
    )
    return f"<html><body><ul>{''.join(cards)}</ul>{button}</body></html>"


DETAIL_PAGE = """
<html><body>
<div data-automation-id="jobPostingDescription">
  <p>Responsibilities: Develop etch process recipes for 3nm nodes.</p>
  <p>Minimum Education: Master's degree in Chemical Engineering</p>
  <p>Experience: 2+ years in plasma etch</p>
  <p>Salary Range: $120,000 - $165,000</p>
</div>
</body></html>
"""


def test_build_page_url():
    assert build_page_url(BASE_URL, 1, 20) == f"{BASE_URL}?offset=0"
    assert build_page_url(BASE_URL, 3, 20) == f"{BASE_URL}?offset=40"
    assert build_page_url(f"{BASE_URL}?q=etch", 2, 20) == f"{BASE_URL}?q=etch&offset=20"


def test_parse_job_list(settings):
    html = list_page(
        [
            job_card("Process Engineer", "Santa-Clara/Process-Engineer_R1"),
            job_card("Test Technician", "Austin/Test-Technician_R2"),
            job_card("QA", "Austin/QA_R3"),  # too short
            job_card("", "Austin/Empty_R4"),
        ]
    )
    jobs = parse_job_list(html, BASE_URL, settings)

    assert [job.title for job in jobs] == ["Process Engineer", "Test Technician"], (
        f"short and untitled cards must be skipped, got {jobs}"
    )
    first = jobs[0]
    assert first.url == "https://amat.wd1.myworkdayjobs.com/External/job/Santa-Clara/Process-Engineer_R1"
    assert first.location == "Santa Clara, CA"
    assert first.posting_date == date(2026, 3, 15)

    settings.MIN_JOB_TITLE_LENGTH = 16
    assert [job.title for job in parse_job_list(html, BASE_URL, settings)] == ["Process Engineer"]


def test_has_next_page():
    assert has_next_page(list_page([], next_enabled=True))
    assert not has_next_page(list_page([], next_enabled=False))
    assert not has_next_page("<html><body></body></html>")


def test_parse_description_text():
    text = parse_description_text(DETAIL_PAGE)
    assert text.startswith("Responsibilities: Develop etch")
    assert parse_description_text("<html><body><p>nothing</p></body></html>") is None


def test_discovery_walks_pages_until_next_is_disabled(settings):
    pages = {
        build_page_url(BASE_URL, 1, 20): (200, list_page([job_card("Etch Engineer", "a/Etch_R1")])),
        build_page_url(BASE_URL, 2, 20): (
            200,
            list_page([job_card("CMP Engineer", "a/CMP_R2")], next_enabled=False),
        ),
    }
    context = FakeContext(pages=pages)
    company = Company("Applied Materials", BASE_URL, "workday")

    jobs = asyncio.run(discover_jobs(context, company, settings))

    assert [job.title for job in jobs] == ["Etch Engineer", "CMP Engineer"]
    assert len(context.visited) == 2
    assert all(page.closed for page in context.opened), "every tab must be closed"


def test_discovery_stops_on_repeated_page_and_fetch_failure(settings):
    same = list_page([job_card("Etch Engineer", "a/Etch_R1")])
    pages = {
        build_page_url(BASE_URL, 1, 20): (200, same),
        build_page_url(BASE_URL, 2, 20): (200, same),
    }
    company = Company("Applied Materials", BASE_URL, "workday")

    jobs = asyncio.run(discover_jobs(FakeContext(pages=pages), company, settings))
    assert len(jobs) == 1, "a page with only known jobs ends pagination"

    jobs = asyncio.run(discover_jobs(FakeContext(pages={}), company, settings))
    assert jobs == [], "an HTTP error on the first page yields no jobs"


def test_adapter_scrapes_details(settings):
    job_url = "https://amat.wd1.myworkdayjobs.com/External/job/a/Etch_R1"
    pages = {
        build_page_url(BASE_URL, 1, 20): (
            200,
            list_page(
                [job_card("Etch Engineer", "a/Etch_R1"), job_card("CMP Engineer", "a/CMP_R2")],
                next_enabled=False,
            ),
        ),
        job_url: (200, DETAIL_PAGE),
    }
    company = Company("Applied Materials", BASE_URL, "workday")
    adapter = WorkdayAdapter(FakeContext(pages=pages), company, settings, DEFAULT_PROFILE)

    jobs = asyncio.run(adapter.scrape_company(fetch_details=True))

    assert len(jobs) == 2
    etch, cmp_job = jobs
    assert etch.company == "Applied Materials"
    assert etch.details.min_education == "Master's degree in Chemical Engineering"
    assert etch.details.salary_range == "$120,000 - $165,000"
    assert cmp_job.details.found() == 0, "a failed detail fetch leaves the fields empty"
