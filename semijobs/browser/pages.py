import logging
from typing import Optional

from playwright.async_api import BrowserContext
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from semijobs.config.settings import Settings
from semijobs.core.errors import FetchError

logger = logging.getLogger(__name__)


async def fetch_page_html(
    context: BrowserContext,
    url: str,
    settings: Settings,
    ready_selector: Optional[str] = None,
) -> str:
    """
    Navigate a fresh tab to ``url`` and return the rendered HTML.

    Waits for ``ready_selector`` when given; a page where it never appears
    is still returned (it may simply have no results).
    """
    page = await context.new_page()
    try:
        logger.debug(f"Loading: {url}")
        response = await page.goto(
            url,
            wait_until="domcontentloaded",
            timeout=settings.NAVIGATION_TIMEOUT,
        )
        if response is not None and not response.ok:
            raise FetchError(url, f"HTTP {response.status}")

        if ready_selector:
            try:
                await page.wait_for_selector(ready_selector, timeout=settings.SELECTOR_TIMEOUT)
            except PlaywrightTimeoutError:
                logger.debug(f"Selector {ready_selector!r} not found on {url}")

        return await page.content()
    finally:
        await page.close()
