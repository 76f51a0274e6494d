# Oracle Cloud HCM candidate experience REST endpoints
REQUISITIONS_PATH = "/hcmRestApi/resources/latest/recruitingCEJobRequisitions"
REQUISITION_DETAILS_PATH = "/hcmRestApi/resources/latest/recruitingCEJobRequisitionDetails"

REQUISITIONS_EXPAND = "requisitionList.secondaryLocations,requisitionList.workLocation"

DEFAULT_SITE_NUMBER = "CX"
PAGE_SIZE = 25

US_COUNTRY_CODE = "US"
US_FALLBACK_LOCATION = "United States"

JSON_HEADERS = {
    "Accept": "application/json",
    "Accept-Language": "en-US,en;q=0.5",
}
