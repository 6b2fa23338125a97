import argparse
import json
import logging
import sys
from typing import List, Optional

from ..config.rules import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, FILTER_OPTIONS, SORT_OPTIONS
from ..config.settings import SOURCES
from ..errors import InvalidQueryError, RefreshFailure
from ..ingestion.sources.files import FileSource
from ..ingestion.sources.registry import build_source
from ..models import Query
from ..utils.logging import ROOT_LOGGER, get_logger
from .display import format_page, to_json
from .service import CatalogService

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_REFRESH_FAILED = 1
EXIT_INVALID_QUERY = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clearfashion",
        description="Aggregate scraped product listings and browse them page by page.",
    )
    src = parser.add_argument_group("sources")
    src.add_argument("--source", action="append", default=[], choices=sorted(SOURCES),
                     help="registered scrape/fetch source (repeatable)")
    src.add_argument("--input", action="append", default=[], metavar="PATH",
                     help="raw records file: .json, .jsonl or .csv (repeatable)")
    src.add_argument("--input-brand", default=None,
                     help="brand for --input records that carry none")
    src.add_argument("--base-url", default=None,
                     help="base URL for relative links in --input records")

    q = parser.add_argument_group("query")
    q.add_argument("--page", type=int, default=DEFAULT_PAGE)
    q.add_argument("--size", "--limit", dest="size", type=int, default=DEFAULT_PAGE_SIZE)
    q.add_argument("--brand", default="")
    q.add_argument("--filter", default="", choices=FILTER_OPTIONS)
    q.add_argument("--sort", default="", choices=SORT_OPTIONS)

    parser.add_argument("--brands", action="store_true", help="list catalog brands and exit")
    parser.add_argument("--json", action="store_true", help="print the API JSON envelope")
    parser.add_argument("--debug", action="store_true", help="debug logging")
    return parser


def _enable_debug() -> None:
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(logging.DEBUG)
    for handler in root.handlers:
        handler.setLevel(logging.DEBUG)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.debug:
        _enable_debug()

    sources = [build_source(name) for name in args.source]
    sources += [FileSource(path, brand=args.input_brand, base_url=args.base_url) for path in args.input]
    if not sources:
        parser.error("at least one --source or --input is required")

    try:
        query = Query(page=args.page, size=args.size, brand=args.brand, filter=args.filter, sort=args.sort)
    except InvalidQueryError as e:
        print(f"Invalid query: {e}", file=sys.stderr)
        return EXIT_INVALID_QUERY

    service = CatalogService()
    try:
        service.refresh_from_sources(sources)
    except RefreshFailure as e:
        print(f"Refresh failed: {e.reason}", file=sys.stderr)
        return EXIT_REFRESH_FAILED

    if args.brands:
        brands = service.brands()
        print(json.dumps(brands, ensure_ascii=False) if args.json else "\n".join(brands))
        return EXIT_OK

    page, stats = service.evaluate(query)
    print(to_json(page, stats) if args.json else format_page(page, stats))
    return EXIT_OK
