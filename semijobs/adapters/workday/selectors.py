"""
All CSS selectors used by the Workday adapter.
Centralized here so that selector changes only need to happen in one place.
"""

# --- Job list page ---

# Job card selectors - tried in order
JOB_CARD_SELECTORS = [
    "li[data-automation-id='jobPostingItem']",
    "div.jobs-list-item",
]

JOB_TITLE_SELECTOR = "[data-automation-id='jobTitle']"
JOB_LOCATION_SELECTOR = "[data-automation-id='locations']"
JOB_LINK_SELECTOR = "a[data-automation-id='jobTitle']"
POSTED_ON_SELECTOR = "[data-automation-id='postedOn']"

# Waited for after navigation, before the page HTML is read
JOB_LIST_READY_SELECTOR = ", ".join(JOB_CARD_SELECTORS)

NEXT_PAGE_SELECTOR = "button[data-uxi-widget-type='paginationNext']"

# --- Job detail page ---

# Description selectors - tried in order
DESCRIPTION_SELECTORS = [
    "[data-automation-id='jobPostingDescription']",
    "div.job-description",
    "div.jobdescription",
]

DESCRIPTION_READY_SELECTOR = ", ".join(DESCRIPTION_SELECTORS)
