import os

DEFAULT_CATALOG_ID = os.environ.get("CLEARFASHION_CATALOG", "default")

# HTTP defaults for scrape/fetch sources
HTTP_TIMEOUT = float(os.environ.get("CLEARFASHION_HTTP_TIMEOUT", "20"))
HTTP_RETRIES = int(os.environ.get("CLEARFASHION_HTTP_RETRIES", "2"))
HTTP_BACKOFF = 0.8
FETCH_WORKERS = int(os.environ.get("CLEARFASHION_FETCH_WORKERS", "4"))

DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/121.0.0.0 Safari/537.36"
    ),
    "Accept-Language": "en-US,en;q=0.9,fr;q=0.8",
    "Accept": "text/html,application/json;q=0.9,*/*;q=0.8",
    "Connection": "keep-alive",
}

DEDICATED_BASE_URL = "https://www.dedicatedbrand.com/en/"

SOURCES = {
    "dedicated": {
        "kind": "dedicatedbrand",
        "mode": "api",
        "brand": "DEDICATED",
        "url": os.environ.get(
            "CLEARFASHION_DEDICATED_URL",
            DEDICATED_BASE_URL + "loadfilter?category=men%2Fall",
        ),
    },
    "dedicated-html": {
        "kind": "dedicatedbrand",
        "mode": "html",
        "brand": "DEDICATED",
        "url": DEDICATED_BASE_URL + "men/news",
    },
}
