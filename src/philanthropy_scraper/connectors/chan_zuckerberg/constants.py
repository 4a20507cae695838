"""Chan Zuckerberg Initiative identifiers and page settings."""

FUND_ID = "9b4a1c89-a28d-4196-aa42-5d108aff7b5d"  # Chan Zuckerberg Initiative
BILLIONAIRE_ID = "3b7bb5fe-04df-4ae9-af6f-9c054ecf29a8"  # Mark Zuckerberg

GRANTS_URL = "https://chanzuckerberg.com/grants-ventures/grants/"

RECENT_ROWS = 25

# Column cells in the grants table, by list-N class
COL_GRANTEE = 0
COL_DESCRIPTION = 1
COL_AMOUNT_AND_YEARS = 2
COL_TOPICS = 3
