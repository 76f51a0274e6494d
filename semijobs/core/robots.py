import logging
import re
from urllib.parse import urlparse

from playwright.async_api import BrowserContext
from playwright.async_api import Error as PlaywrightError

logger = logging.getLogger(__name__)


def site_root(url: str) -> str:
    """'https://host/a/b?x=1' -> 'https://host'"""
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


async def check_robots_txt(
    context: BrowserContext, base_url: str, path: str = "/careers", timeout: int = 10000
) -> bool:
    """
    Basic robots.txt check: False only when a Disallow rule names ``path``.
    Unreachable or missing robots.txt counts as allowed.
    """
    robots_url = f"{site_root(base_url)}/robots.txt"
    try:
        response = await context.request.get(robots_url, timeout=timeout)
        if response.status == 200:
            content = await response.text()
            if re.search(r"Disallow:\s*" + re.escape(path), content, re.IGNORECASE):
                logger.warning(f"robots.txt disallows scraping {path} on {base_url}")
                return False
    except PlaywrightError as e:
        logger.debug(f"Could not fetch robots.txt: {e}")

    return True
