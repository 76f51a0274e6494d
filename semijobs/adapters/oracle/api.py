"""
URL building and JSON fetching for the Oracle CX REST API.
Requests go through the browser context's APIRequestContext so they share
its user agent and headers.
"""

import json
import logging
import re
from typing import Any, Dict

from playwright.async_api import BrowserContext

from semijobs.core.errors import ConfigurationError, FetchError
from semijobs.adapters.oracle.config import (
    DEFAULT_SITE_NUMBER,
    JSON_HEADERS,
    PAGE_SIZE,
    REQUISITION_DETAILS_PATH,
    REQUISITIONS_EXPAND,
    REQUISITIONS_PATH,
)

logger = logging.getLogger(__name__)


def extract_api_base(careers_url: str) -> str:
    """'https://edbz.fa.us2.oraclecloud.com/hcmUI/...' -> 'https://edbz.fa.us2.oraclecloud.com'"""
    match = re.match(r"^https?://[^/]+", careers_url)
    if not match:
        raise ConfigurationError(f"Not an absolute careers URL: {careers_url}")
    return match.group(0)


def extract_site_number(careers_url: str) -> str:
    match = re.search(r"/sites/([^/?#]+)", careers_url)
    if not match:
        logger.warning(
            f"Could not extract site number from URL, defaulting to '{DEFAULT_SITE_NUMBER}'"
        )
        return DEFAULT_SITE_NUMBER
    return match.group(1)


def build_requisitions_url(
    api_base: str, site_number: str, offset: int = 0, limit: int = PAGE_SIZE
) -> str:
    return (
        f"{api_base}{REQUISITIONS_PATH}"
        f"?onlyData=true"
        f"&expand={REQUISITIONS_EXPAND}"
        f"&finder=findReqs;siteNumber={site_number},limit={limit},offset={offset}"
    )


def build_detail_url(api_base: str, job_id: str) -> str:
    return f"{api_base}{REQUISITION_DETAILS_PATH}/{job_id}?onlyData=true&expand=all"


def build_job_url(careers_url: str, job_id: str) -> str:
    """
    Human-readable posting URL: '.../sites/CX/jobs' -> '.../sites/CX/job/<id>'.

    This URL is the upsert key in the jobs table. Rows stored under the older
    '<careers_url>/<id>' form will not match and are inserted again.
    """
    base = re.sub(r"/jobs/?$", "/job", careers_url.rstrip("/"))
    if not base.endswith("/job"):
        base = f"{base}/job"
    return f"{base}/{job_id}"


async def get_json(context: BrowserContext, url: str, timeout: int) -> Dict[str, Any]:
    """
    GET a JSON document. Raises FetchError on a non-2xx status or a body
    that is not a JSON object.
    """
    logger.debug(f"Fetching Oracle API: {url}")
    response = await context.request.get(url, headers=JSON_HEADERS, timeout=timeout)
    if not response.ok:
        raise FetchError(url, f"Oracle API returned HTTP {response.status}")

    try:
        data = json.loads(await response.text())
    except ValueError as e:
        raise FetchError(url, f"Invalid JSON ({e})") from e

    if not isinstance(data, dict):
        raise FetchError(url, "Unexpected JSON payload")
    return data
