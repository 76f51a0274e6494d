import logging
from playwright.async_api import Browser, BrowserContext

from semijobs.config.settings import Settings

logger = logging.getLogger(__name__)

REQUEST_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}


async def create_context(
    browser: Browser,
    user_agent: str,
    settings: Settings,
) -> BrowserContext:
    """
    Create a browser context with the scraper's user agent, locale and headers.
    The context's request API is shared with page navigation (same cookies, same UA).
    """
    context = await browser.new_context(
        user_agent=user_agent,
        locale="en-US",
        ignore_https_errors=settings.IGNORE_HTTPS_ERRORS,
        extra_http_headers=REQUEST_HEADERS,
    )
    context.set_default_navigation_timeout(settings.NAVIGATION_TIMEOUT)
    context.set_default_timeout(settings.SELECTOR_TIMEOUT)

    logger.info("Browser context created.")
    return context
