class ScraperError(Exception):
    """Base class for scraper failures that should stop the current unit of work."""


class FetchError(ScraperError):
    """An HTTP request or page navigation did not produce usable content."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"{reason}: {url}")
        self.url = url
        self.reason = reason


class ConfigurationError(ScraperError):
    """Missing or unreadable configuration (companies file, profile overrides)."""
