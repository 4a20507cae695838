"""Gates Foundation identifiers and search API settings."""

FUND_ID = "3b7ac2c2-760f-4cc6-a71a-887fe10a052f"  # Gates Foundation
BILLIONAIRE_ID = "31bfe210-0592-480a-9fc8-67c54e7c9c05"  # Bill Gates

BASE_URL = "https://www.gatesfoundation.org"
SEARCH_URL = "https://www.gatesfoundation.org/services/gfo/search.ashx"

RESULTS_PER_PAGE = 12
# 21,846 grants in 1814 pages as of June 2020
MAX_PAGES = 1814
RECENT_PAGES = 5

FACETS = [
    "gfocategories",
    "gfotopics",
    "gfoyear",
    "gforegions",
    "gfothumbnailurl",
    "gfograntee_website",
]
GRANT_QUERY = '(@gfomediatype=="Grant")'
