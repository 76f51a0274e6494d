import csv
import logging
from pathlib import Path
from typing import List

from semijobs.core.errors import ConfigurationError
from semijobs.core.models import Company

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = {"company_name", "careers_url", "platform"}

_TRUE_VALUES = {"true", "1", "yes", "y", "t"}


def _is_active(value) -> bool:
    if value is None or not str(value).strip():
        return True
    return str(value).strip().lower() in _TRUE_VALUES


def load_companies(path: Path) -> List[Company]:
    """
    Read the companies CSV (company_name, careers_url, platform, active)
    and return the active rows.
    """
    if not path.exists():
        raise ConfigurationError(f"Companies configuration file not found: {path}")

    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        missing = REQUIRED_COLUMNS - set(reader.fieldnames or [])
        if missing:
            raise ConfigurationError(
                f"Companies file {path} is missing columns: {', '.join(sorted(missing))}"
            )

        companies = [
            Company(
                name=row["company_name"].strip(),
                careers_url=row["careers_url"].strip(),
                platform=row["platform"].strip().lower(),
                active=_is_active(row.get("active")),
            )
            for row in reader
            if row.get("company_name")
        ]

    active = [company for company in companies if company.active]
    logger.info(f"Loaded {len(active)} active companies")
    return active
