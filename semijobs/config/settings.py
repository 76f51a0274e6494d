from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).resolve().parent.parent.parent

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36 "
    "SemiconductorJobsScraper/1.0 (+research@example.com)"
)


class Settings(BaseSettings):
    class Config:
        env_file = BASE_DIR / ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    """
    Configuration settings for the scraper.
    """

    # Browser settings
    HEADLESS: bool = True
    IGNORE_HTTPS_ERRORS: bool = False

    # Rate limiting (seconds)
    DELAY_BETWEEN_REQUESTS: float = 3.0
    DELAY_BETWEEN_COMPANIES: float = 10.0

    # Retries
    MAX_RETRIES: int = 3
    RETRY_DELAY: float = 6.0  # seconds, fixed between attempts

    # Timeouts
    REQUEST_TIMEOUT: int = 30000  # ms
    NAVIGATION_TIMEOUT: int = 20000  # ms
    SELECTOR_TIMEOUT: int = 10000  # ms

    # Identity
    USER_AGENT: str = DEFAULT_USER_AGENT
    # Rotate through fake_useragent strings instead of the fixed research UA
    ROTATE_USER_AGENT: bool = False

    # Pagination
    MAX_PAGES_PER_COMPANY: int = 50  # safety limit
    JOBS_PER_PAGE: int = 20

    # Data quality
    MIN_JOB_TITLE_LENGTH: int = 3
    MAX_JOB_TITLE_LENGTH: int = 200

    # Logging
    LOG_LEVEL: str = "INFO"
    VERBOSE: bool = True

    # Politeness
    RESPECT_ROBOTS_TXT: bool = True
    ROBOTS_PATH: str = "/careers"

    # Paths
    CONFIG_DIR: Path = BASE_DIR / "config"
    DATA_DIR: Path = BASE_DIR / "data"
    LOG_DIR: Path = BASE_DIR / "logs"
    EXPORT_DIR: Path = BASE_DIR / "data" / "exports"
    DB_PATH: Path = BASE_DIR / "data" / "semiconductor_jobs.db"
    COMPANIES_FILE: Path = BASE_DIR / "config" / "companies.csv"
    # Optional JSON file with per-company extraction pattern overrides
    EXTRACTION_PROFILES_FILE: Optional[Path] = None

    def ensure_directories(self) -> None:
        """Create the data, log and export directories if missing."""
        for directory in (self.DATA_DIR, self.LOG_DIR, self.EXPORT_DIR):
            directory.mkdir(parents=True, exist_ok=True)


settings = Settings()
