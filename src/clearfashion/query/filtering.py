"""Brand and named-predicate filtering over the catalog frame."""

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Tuple, Union

import pandas as pd

from ..config.rules import (
    FILTER_REASONABLE_PRICE,
    FILTER_RECENTLY_RELEASED,
    NEW_RELEASE_WINDOW_DAYS,
    REASONABLE_PRICE_MAX,
)
from ..utils.logging import get_logger

logger = get_logger(__name__)


def as_evaluation_date(now: Optional[Union[datetime, date]] = None) -> date:
    """UTC calendar date of the evaluation time (today when ``now`` is None)."""
    if now is None:
        return datetime.now(timezone.utc).date()
    if isinstance(now, datetime):
        if now.tzinfo is not None:
            now = now.astimezone(timezone.utc)
        return now.date()
    return now


def release_window(evaluation_date: date) -> Tuple[date, date]:
    """Trailing window of recent releases, both ends included."""
    return evaluation_date - timedelta(days=NEW_RELEASE_WINDOW_DAYS), evaluation_date


def is_recently_released(released: date, evaluation_date: date) -> bool:
    start, end = release_window(evaluation_date)
    return start <= released <= end


def recently_released_mask(released: pd.Series, evaluation_date: date) -> pd.Series:
    start, end = release_window(evaluation_date)
    return released.between(pd.Timestamp(start), pd.Timestamp(end), inclusive="both")


def filter_by_brand(frame: pd.DataFrame, brand: str) -> pd.DataFrame:
    if not brand:
        return frame
    return frame[frame["brand"] == brand]


def filter_by_name(frame: pd.DataFrame, name: str, evaluation_date: date) -> pd.DataFrame:
    if name == FILTER_REASONABLE_PRICE:
        return frame[frame["price"] < REASONABLE_PRICE_MAX]
    if name == FILTER_RECENTLY_RELEASED:
        return frame[recently_released_mask(frame["released"], evaluation_date)]
    if name:
        logger.warning("Unknown filter '%s' ignored", name)
    return frame


def apply_filters(frame: pd.DataFrame, brand: str, name: str, evaluation_date: date) -> pd.DataFrame:
    """Brand first, then the named predicate. Row order is preserved."""
    filtered = filter_by_brand(frame, brand)
    return filter_by_name(filtered, name, evaluation_date)
