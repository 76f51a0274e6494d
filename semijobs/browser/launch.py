import logging
from playwright.async_api import Browser, Playwright

from semijobs.config.settings import Settings

logger = logging.getLogger(__name__)

LAUNCH_ARGS = [
    "--disable-dev-shm-usage",
    "--no-first-run",
    "--disable-gpu",
    "--mute-audio",
]


async def create_browser(playwright: Playwright, settings: Settings) -> Browser:
    """
    Launch a Chromium browser instance.
    """
    browser = await playwright.chromium.launch(
        headless=settings.HEADLESS,
        args=LAUNCH_ARGS,
    )
    logger.info(f"Browser launched (Headless: {settings.HEADLESS}).")
    return browser
