"""Query engine: filter, then sort, statistics and paginate.

Submodules:
  - filtering: brand and named predicates, recent-release window
  - sorting: stable named comparators
  - statistics: nearest-rank percentiles and counts
"""

from datetime import date, datetime
from typing import List, Optional, Sequence, Tuple, Union

from ..models import Catalog, Page, Product, Query, Statistics
from ..utils.logging import get_logger
from .filtering import apply_filters, as_evaluation_date
from .sorting import sort_frame
from .statistics import compute as compute_statistics

logger = get_logger(__name__)


def paginate(products: Sequence[Product], page: int, size: int) -> Page:
    """Slice ``[(page-1)*size, page*size)``; pages past the end are empty."""
    count = len(products)
    page_count = max(1, -(-count // size))
    start = (page - 1) * size
    return Page(
        items=tuple(products[start:start + size]),
        current_page=page,
        page_count=page_count,
        page_size=size,
        count=count,
    )


def select(catalog: Catalog, query: Query, evaluation_date: date) -> List[Product]:
    """Filtered and sorted products of ``catalog``, before pagination."""
    filtered = apply_filters(catalog.frame, query.brand, query.filter, evaluation_date)
    ordered = sort_frame(filtered, query.sort)
    return [catalog.products[pos] for pos in ordered["position"].tolist()]


def evaluate(
    catalog: Catalog,
    query: Query,
    now: Optional[Union[datetime, date]] = None,
) -> Tuple[Page, Statistics]:
    evaluation_date = as_evaluation_date(now)
    selected = select(catalog, query, evaluation_date)
    stats = compute_statistics(selected, evaluation_date, total_count=len(catalog))
    page = paginate(selected, query.page, query.size)

    logger.debug(
        "Catalog %s query %s -> %d matched, page %d/%d",
        catalog.catalog_id, query, page.count, page.current_page, page.page_count,
    )
    return page, stats


def list_brands(catalog: Catalog) -> List[str]:
    """Distinct non-empty brands of the catalog, sorted."""
    return sorted({p.brand for p in catalog.products if p.brand})
