"""
Pagination logic for Workday job list pages.
"""


def build_page_url(base_url: str, page_num: int, jobs_per_page: int) -> str:
    """
    Build the list URL for a 1-based page number. Workday paginates by offset.
    """
    offset = (page_num - 1) * jobs_per_page
    separator = "&" if "?" in base_url else "?"
    return f"{base_url}{separator}offset={offset}"
