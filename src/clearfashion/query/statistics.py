"""Summary statistics of a filtered (pre-pagination) product set."""

from datetime import date, datetime
from typing import Optional, Sequence, Union

import numpy as np

from ..config.rules import PERCENTILES, UNKNOWN_DATE
from ..models import Product, Statistics
from .filtering import as_evaluation_date, is_recently_released


def nearest_rank(sorted_prices: np.ndarray, percent: int) -> int:
    """Value at index floor(n * percent / 100), clamped to the last element.

    Integer arithmetic keeps the index exact; an empty array gives 0.
    """
    n = len(sorted_prices)
    if n == 0:
        return 0
    index = min(n * percent // 100, n - 1)
    return int(sorted_prices[index])


def price_percentiles(products: Sequence[Product]) -> dict:
    prices = np.sort(
        np.fromiter((p.price for p in products), dtype=np.int64, count=len(products)),
        kind="stable",
    )
    return {f"p{pct}": nearest_rank(prices, pct) for pct in PERCENTILES}


def compute(
    products: Sequence[Product],
    evaluation_time: Optional[Union[datetime, date]] = None,
    total_count: Optional[int] = None,
) -> Statistics:
    """Statistics of ``products``; ``total_count`` is the unfiltered catalog size.

    ``new_count`` always applies the recent-release window, whatever filter
    produced ``products``. ``brand_count`` skips brandless products, as
    ``engine.list_brands`` does.
    """
    evaluation_date = as_evaluation_date(evaluation_time)
    released = [p.released for p in products]

    return Statistics(
        total_count=len(products) if total_count is None else total_count,
        matched_count=len(products),
        brand_count=len({p.brand for p in products if p.brand}),
        new_count=sum(1 for r in released if is_recently_released(r, evaluation_date)),
        last_released_date=max(released) if released else UNKNOWN_DATE,
        **price_percentiles(products),
    )
