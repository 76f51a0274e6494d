import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Playwright,
)

from semijobs.config.settings import Settings
from semijobs.browser.user_agent import UserAgentProvider
from semijobs.browser.launch import create_browser
from semijobs.browser.context import create_context

logger = logging.getLogger(__name__)


class BrowserManager:
    """
    Owns the single Playwright browser and the context every adapter shares.
    Workday pages and Oracle API calls both go through that one context.
    """

    _playwright: Optional[Playwright] = None
    _browser: Optional[Browser] = None
    _context: Optional[BrowserContext] = None

    @classmethod
    async def initialize(cls, settings: Settings):
        """
        Start Playwright, launch the browser and open the context, skipping
        whatever is already running.
        """
        if cls._playwright is None:
            cls._playwright = await async_playwright().start()
            logger.info("Playwright started.")

        if cls._browser is None:
            cls._browser = await create_browser(cls._playwright, settings)

        if cls._context is None:
            user_agent = UserAgentProvider.get(settings)
            logger.info(f"Using User Agent: {user_agent}")
            cls._context = await create_context(cls._browser, user_agent, settings)

    @classmethod
    async def get_context(cls, settings: Settings) -> BrowserContext:
        if cls._context is None:
            await cls.initialize(settings)
        return cls._context

    @classmethod
    @asynccontextmanager
    async def session(cls, settings: Settings) -> AsyncIterator[BrowserContext]:
        """
        Shared context for one scrape. Everything is torn down on exit,
        including when the scrape raises.
        """
        try:
            yield await cls.get_context(settings)
        finally:
            await cls.close()

    @classmethod
    async def close(cls):
        if cls._context:
            await cls._context.close()
            cls._context = None
            logger.info("Browser context closed.")

        if cls._browser:
            await cls._browser.close()
            cls._browser = None
            logger.info("Browser closed.")

        if cls._playwright:
            await cls._playwright.stop()
            cls._playwright = None
            logger.info("Playwright stopped.")
