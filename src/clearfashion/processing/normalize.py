"""Raw record -> canonical Product.

A raw record is whatever a source produced: a dict carrying at least a
link (``link`` or ``url``), a ``name`` and a ``price``, optionally ``brand``,
``photo`` (or ``image``) and ``released``.
"""

from __future__ import annotations

import math
import re
import uuid
from datetime import date, datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional, Tuple
from urllib.parse import urljoin, urlsplit, urlunsplit

import numpy as np
import pandas as pd

from ..errors import NormalizationError
from ..models import Product
from ..utils.logging import get_logger

logger = get_logger(__name__)

LINK_KEYS = ("link", "url")
PHOTO_KEYS = ("photo", "image", "image_url")

CURRENCY_RE = re.compile(r"(?:€|\$|£|\beur\b|\busd\b|\bgbp\b)", re.IGNORECASE)
NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")


def is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def first_present(raw: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        value = raw.get(key)
        if not is_missing(value):
            return value
    return None


def collapse_whitespace(text: Any) -> str:
    """'  Jacket \\n  Black ' -> 'Jacket Black'"""
    if is_missing(text):
        return ""
    return " ".join(str(text).split())


def canonicalize_link(value: Any, base_url: Optional[str] = None) -> Optional[str]:
    """Absolute http(s) URL without fragment, scheme and host lower-cased.

    Relative links are resolved against ``base_url``. Returns None when no
    absolute URL can be built.
    """
    if is_missing(value):
        return None
    link = str(value).strip()
    if link.startswith("//"):
        link = "https:" + link
    elif base_url:
        link = urljoin(base_url, link)
    parts = urlsplit(link)
    if parts.scheme.lower() not in ("http", "https") or not parts.netloc:
        return None
    return urlunsplit(
        (parts.scheme.lower(), parts.netloc.lower(), parts.path or "/", parts.query, "")
    )


def product_uuid(link: str) -> str:
    """Content-addressed identity: the same canonical link always gives the same uuid."""
    return str(uuid.uuid5(uuid.NAMESPACE_URL, link))


def parse_price_number(value: Any) -> Optional[float]:
    """
    45 -> 45.0
    '45,90 €' -> 45.9
    '$1,299.00' -> 1299.0
    'sold out' -> None
    """
    if isinstance(value, (bool, np.bool_)):
        return None
    if isinstance(value, (int, np.integer)):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, (float, np.floating)):
        if math.isnan(value):
            return None
        return float(value)
    if not isinstance(value, str):
        return None

    s = CURRENCY_RE.sub("", value)
    s = re.sub(r"\s+", "", s)
    if "," in s and "." in s:
        # the last separator is the decimal mark
        if s.rfind(",") > s.rfind("."):
            s = s.replace(".", "").replace(",", ".")
        else:
            s = s.replace(",", "")
    elif "," in s:
        s = s.replace(",", ".")
    if not NUMBER_RE.fullmatch(s):
        return None
    return float(s)


def parse_released(value: Any) -> Optional[date]:
    """Calendar date from a date, datetime or ISO 8601 string.

    Aware datetimes are read in UTC, like the evaluation date. Returns None
    when missing, raises ValueError when present but invalid.
    """
    if is_missing(value):
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


def normalize_photo(value: Any, base_url: Optional[str] = None) -> Optional[str]:
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    return canonicalize_link(value, base_url)


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


def normalize(
    raw: Mapping[str, Any],
    brand: Optional[str] = None,
    base_url: Optional[str] = None,
    ingested_on: Optional[date] = None,
) -> Product:
    """Build the canonical Product for ``raw`` or raise NormalizationError.

    ``brand`` is the fixed brand of the source and is used when the record
    carries none. ``ingested_on`` defaults to today's UTC date and becomes
    ``released`` when the source gives no release date.
    """
    # local import: validate builds on the parsers above
    from .validate import validate_raw_record

    problems = validate_raw_record(raw, base_url=base_url)
    if problems:
        raise NormalizationError(problems, record=dict(raw) if isinstance(raw, Mapping) else None)

    link = canonicalize_link(first_present(raw, LINK_KEYS), base_url)
    released = parse_released(raw.get("released"))
    record_brand = collapse_whitespace(raw.get("brand"))

    return Product(
        uuid=product_uuid(link),
        name=collapse_whitespace(raw.get("name")),
        brand=record_brand or collapse_whitespace(brand),
        price=int(parse_price_number(raw.get("price"))),
        link=link,
        photo=normalize_photo(first_present(raw, PHOTO_KEYS), base_url),
        released=released or ingested_on or today_utc(),
    )


def normalize_batch(
    records: Iterable[Any],
    brand: Optional[str] = None,
    base_url: Optional[str] = None,
    ingested_on: Optional[date] = None,
) -> Tuple[List[Product], List[Tuple[int, NormalizationError]]]:
    """Normalize every record, skipping (and logging) the malformed ones."""
    ingested_on = ingested_on or today_utc()
    products: List[Product] = []
    rejected: List[Tuple[int, NormalizationError]] = []

    for index, raw in enumerate(records):
        try:
            products.append(normalize(raw, brand=brand, base_url=base_url, ingested_on=ingested_on))
        except NormalizationError as exc:
            logger.warning("Skipping record #%d: %s", index, ", ".join(exc.problems))
            rejected.append((index, exc))

    if rejected:
        logger.info("Normalized %d records, rejected %d", len(products), len(rejected))
    return products, rejected
