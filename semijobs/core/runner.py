import logging
import sqlite3
import time
from typing import Dict, List, Optional, Type

from playwright.async_api import BrowserContext

from semijobs.adapters.base import JobPortalAdapter
from semijobs.adapters.oracle.adapter import OracleAdapter
from semijobs.adapters.workday.adapter import WorkdayAdapter
from semijobs.browser.manager import BrowserManager
from semijobs.config.settings import Settings
from semijobs.core.models import Company, Job
from semijobs.core.quarter import get_current_quarter
from semijobs.core.rate_limit import polite_delay
from semijobs.core.robots import check_robots_txt
from semijobs.extraction.profiles import get_profile
from semijobs.storage.companies import load_companies
from semijobs.storage.database import (
    complete_scrape_run,
    get_conn,
    init_db,
    save_jobs,
    start_scrape_run,
    sync_companies,
)
from semijobs.storage.export import export_jobs_csv

logger = logging.getLogger(__name__)

ADAPTERS: Dict[str, Type[JobPortalAdapter]] = {
    "workday": WorkdayAdapter,
    "oracle": OracleAdapter,
}

COMBINED_EXPORT_LABEL = "ALL_COMPANIES"


class Runner:
    """
    Orchestrates a scrape: companies are processed one after another, each
    run is recorded in the database and exported to CSV.
    """

    def __init__(
        self,
        settings: Settings,
        adapters: Optional[Dict[str, Type[JobPortalAdapter]]] = None,
    ):
        self.settings = settings
        self.adapters = adapters if adapters is not None else ADAPTERS
        self.conn: Optional[sqlite3.Connection] = None
        self.context: Optional[BrowserContext] = None

    async def run(self, target: str, fetch_details: bool = True) -> List[Job]:
        """
        Scrape ``target``: "all" for every active company, otherwise a
        company name from the companies file.
        """
        self.settings.ensure_directories()
        self.conn = get_conn(self.settings.DB_PATH)
        try:
            async with BrowserManager.session(self.settings) as context:
                self.context = context

                if target.lower() == "all":
                    return await self.scrape_all(fetch_details)

                companies = self.prepare()
                company = next(
                    (c for c in companies if c.name.lower() == target.lower()), None
                )
                if company is None:
                    logger.error(f"Company not found: {target}")
                    return []
                return await self.scrape_company(company, fetch_details)
        finally:
            self.conn.close()
            self.conn = None
            self.context = None

    def prepare(self) -> List[Company]:
        """Create the schema, load active companies and register them."""
        init_db(self.conn)
        companies = load_companies(self.settings.COMPANIES_FILE)
        sync_companies(self.conn, companies)
        return companies

    async def scrape_all(self, fetch_details: bool = True) -> List[Job]:
        logger.info("=" * 40)
        logger.info("STARTING QUARTERLY SCRAPE")
        logger.info(f"Quarter: {get_current_quarter().label}")
        logger.info("=" * 40)
        started = time.monotonic()

        companies = self.prepare()
        all_jobs: List[Job] = []

        for i, company in enumerate(companies, 1):
            all_jobs.extend(await self.scrape_company(company, fetch_details))

            if i < len(companies):
                logger.info(
                    f"Waiting {self.settings.DELAY_BETWEEN_COMPANIES} seconds before next company..."
                )
                await polite_delay(self.settings.DELAY_BETWEEN_COMPANIES)

        export_jobs_csv(all_jobs, COMBINED_EXPORT_LABEL, self.settings.EXPORT_DIR)

        minutes = (time.monotonic() - started) / 60
        logger.info("SCRAPING COMPLETED")
        logger.info(f"Total duration: {minutes:.2f} minutes")
        logger.info(f"Total jobs: {len(all_jobs)}")
        return all_jobs

    async def scrape_company(self, company: Company, fetch_details: bool = True) -> List[Job]:
        """
        Scrape one company and persist the result. Failures are recorded on
        the scrape run and produce no jobs; they never propagate.
        """
        logger.info(f"Starting scrape for: {company.name}")

        if self.settings.RESPECT_ROBOTS_TXT and not await check_robots_txt(
            self.context,
            company.careers_url,
            self.settings.ROBOTS_PATH,
            self.settings.REQUEST_TIMEOUT,
        ):
            logger.warning(f"Skipping {company.name}: disallowed by robots.txt")
            return []

        run_id = start_scrape_run(self.conn, company.name)

        adapter_cls = self.adapters.get(company.platform)
        if adapter_cls is None:
            logger.warning(f"Platform {company.platform} not yet implemented")
            complete_scrape_run(self.conn, run_id)
            return []

        try:
            profile = get_profile(company.name, self.settings.EXTRACTION_PROFILES_FILE)
            adapter = adapter_cls(self.context, company, self.settings, profile)
            jobs = await adapter.scrape_company(fetch_details)
        except Exception as e:
            logger.exception(f"Error scraping {company.name}: {e}")
            complete_scrape_run(self.conn, run_id, status="failed", error=str(e))
            return []

        result = save_jobs(self.conn, jobs, company.name, run_id)
        complete_scrape_run(self.conn, run_id, len(jobs), result)
        export_jobs_csv(jobs, company.name, self.settings.EXPORT_DIR)

        logger.info(f"Completed scrape for: {company.name} ({len(jobs)} jobs)")
        return jobs
