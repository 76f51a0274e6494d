"""Shared fixtures: settings pointed at tmp_path and fake Playwright objects."""

import json
import os
import sys
from typing import Dict, List, Optional, Tuple, Union

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from semijobs.config.settings import Settings


class FakeResponse:
    def __init__(self, status: int = 200, body: Union[str, dict] = ""):
        self.status = status
        self.body = json.dumps(body) if isinstance(body, dict) else body

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    async def text(self) -> str:
        return self.body


class FakeRequest:
    """Stands in for BrowserContext.request (APIRequestContext)."""

    def __init__(self, routes: Dict[str, FakeResponse]):
        self.routes = routes
        self.calls: List[str] = []

    async def get(self, url: str, headers=None, timeout=None) -> FakeResponse:
        self.calls.append(url)
        return self.routes.get(url, FakeResponse(404, "not found"))


class FakePage:
    def __init__(self, context: "FakeContext"):
        self.context = context
        self.url: Optional[str] = None
        self.closed = False

    async def goto(self, url: str, wait_until=None, timeout=None) -> FakeResponse:
        self.url = url
        self.context.visited.append(url)
        status, _ = self.context.pages.get(url, (404, ""))
        return FakeResponse(status)

    async def wait_for_selector(self, selector: str, timeout=None):
        return None

    async def content(self) -> str:
        return self.context.pages.get(self.url, (404, ""))[1]

    async def close(self):
        self.closed = True


class FakeContext:
    """
    Minimal BrowserContext: ``pages`` maps URL to (status, html) for
    navigation, ``routes`` maps URL to FakeResponse for context.request.
    """

    def __init__(
        self,
        pages: Optional[Dict[str, Tuple[int, str]]] = None,
        routes: Optional[Dict[str, FakeResponse]] = None,
    ):
        self.pages = pages or {}
        self.request = FakeRequest(routes or {})
        self.visited: List[str] = []
        self.opened: List[FakePage] = []

    async def new_page(self) -> FakePage:
        page = FakePage(self)
        self.opened.append(page)
        return page


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings with no delays, one attempt per fetch and all paths under tmp_path."""
    return Settings(
        DELAY_BETWEEN_REQUESTS=0,
        DELAY_BETWEEN_COMPANIES=0,
        MAX_RETRIES=1,
        RETRY_DELAY=0,
        RESPECT_ROBOTS_TXT=False,
        MAX_PAGES_PER_COMPANY=5,
        CONFIG_DIR=tmp_path / "config",
        DATA_DIR=tmp_path / "data",
        LOG_DIR=tmp_path / "logs",
        EXPORT_DIR=tmp_path / "data" / "exports",
        DB_PATH=tmp_path / "data" / "jobs.db",
        COMPANIES_FILE=tmp_path / "config" / "companies.csv",
    )
