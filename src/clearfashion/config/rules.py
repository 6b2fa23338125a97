"""
Query rule constants.

Filter and sort names are the values the browser client sends; thresholds
live here so the query engine and the statistics calculator share them.
"""

# ── Filters ──────────────────────────────────────────────────────────
FILTER_REASONABLE_PRICE = "reasonable-price"
FILTER_RECENTLY_RELEASED = "recently-released"
FILTER_OPTIONS = ("", FILTER_REASONABLE_PRICE, FILTER_RECENTLY_RELEASED)

REASONABLE_PRICE_MAX = 50       # strict: price < 50
NEW_RELEASE_WINDOW_DAYS = 14    # trailing window, evaluation date included

# ── Sorts ────────────────────────────────────────────────────────────
SORT_PRICE_ASC = "price-asc"
SORT_PRICE_DESC = "price-desc"
SORT_DATE_ASC = "date-asc"
SORT_DATE_DESC = "date-desc"
SORT_OPTIONS = ("", SORT_PRICE_ASC, SORT_PRICE_DESC, SORT_DATE_ASC, SORT_DATE_DESC)

# sort name -> (column, ascending)
SORT_COLUMNS = {
    SORT_PRICE_ASC: ("price", True),
    SORT_PRICE_DESC: ("price", False),
    SORT_DATE_ASC: ("released", True),
    SORT_DATE_DESC: ("released", False),
}

# ── Pagination ───────────────────────────────────────────────────────
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 12

# ── Statistics ───────────────────────────────────────────────────────
PERCENTILES = (50, 90, 95)      # nearest-rank, integer percent
UNKNOWN_DATE = "unknown"

# ── Prices ───────────────────────────────────────────────────────────
# prices are held in int64 columns and arrays
PRICE_MAX = 2**63 - 1
