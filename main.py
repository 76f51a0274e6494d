import argparse
import asyncio
import logging
import sys
from datetime import date

from semijobs.config.settings import Settings, settings
from semijobs.core.runner import Runner

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(settings: Settings, level: str) -> None:
    """
    Log to a daily file under LOG_DIR, and to stdout when VERBOSE is set.
    """
    settings.ensure_directories()
    log_file = settings.LOG_DIR / f"scrape_{date.today().strftime('%Y%m%d')}.log"

    handlers = [logging.FileHandler(log_file, encoding="utf-8")]
    if settings.VERBOSE:
        handlers.append(logging.StreamHandler(sys.stdout))

    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, handlers=handlers)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Scrape job postings from semiconductor company career sites."
    )
    parser.add_argument(
        "target",
        nargs="?",
        help='"all" for every active company, or a company name from companies.csv',
    )
    parser.add_argument(
        "--no-details",
        action="store_true",
        help="Only collect job listings, skip the per-job detail pages",
    )
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
    )
    return parser


async def main(target: str, fetch_details: bool):
    """
    Main entry point.
    """
    runner = Runner(settings)
    await runner.run(target, fetch_details=fetch_details)


if __name__ == "__main__":
    parser = build_parser()
    args = parser.parse_args()

    if not args.target:
        parser.print_usage()
        sys.exit(1)

    configure_logging(settings, args.log_level)
    try:
        asyncio.run(main(args.target, fetch_details=not args.no_details))
    except KeyboardInterrupt:
        pass
