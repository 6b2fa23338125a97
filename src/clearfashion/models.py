"""Canonical data models shared by the normalizer, the store and the query engine."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import pandas as pd

from .config.rules import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, UNKNOWN_DATE
from .errors import InvalidQueryError

@dataclass(frozen=True)
class Product:
    uuid: str
    name: str
    brand: str
    price: int
    link: str
    photo: Optional[str]
    released: date

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["released"] = self.released.isoformat()
        return payload


def _empty_frame() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "position": pd.Series(dtype="int64"),
            "price": pd.Series(dtype="int64"),
            "brand": pd.Series(dtype="object"),
            "released": pd.Series(dtype="datetime64[ns]"),
        }
    )


def build_frame(products: Tuple[Product, ...]) -> pd.DataFrame:
    """Columnar view used by the query engine; ``position`` indexes ``products``."""
    if not products:
        return _empty_frame()
    return pd.DataFrame(
        {
            "position": range(len(products)),
            "price": [p.price for p in products],
            "brand": [p.brand for p in products],
            "released": pd.to_datetime([p.released for p in products]),
        }
    )


@dataclass(frozen=True)
class Catalog:
    """One refresh cycle worth of products. Never mutated after construction."""

    catalog_id: str
    products: Tuple[Product, ...] = ()
    refreshed_at: Optional[datetime] = None
    frame: pd.DataFrame = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "products", tuple(self.products))
        if self.frame is None:
            object.__setattr__(self, "frame", build_frame(self.products))

    def __len__(self) -> int:
        return len(self.products)

    @classmethod
    def empty(cls, catalog_id: str) -> "Catalog":
        return cls(catalog_id=catalog_id)

    @classmethod
    def build(cls, catalog_id: str, products) -> "Catalog":
        return cls(
            catalog_id=catalog_id,
            products=tuple(products),
            refreshed_at=datetime.now(timezone.utc),
        )


def _coerce_positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidQueryError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, str):
        value = value.strip()
        try:
            value = int(value)
        except ValueError:
            raise InvalidQueryError(f"{name} must be an integer, got {value!r}") from None
    if not isinstance(value, int):
        raise InvalidQueryError(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise InvalidQueryError(f"{name} must be >= 1, got {value}")
    return value


@dataclass(frozen=True)
class Query:
    page: int = DEFAULT_PAGE
    size: int = DEFAULT_PAGE_SIZE
    brand: str = ""
    filter: str = ""
    sort: str = ""

    def __post_init__(self):
        object.__setattr__(self, "page", _coerce_positive_int("page", self.page))
        object.__setattr__(self, "size", _coerce_positive_int("size", self.size))
        for name in ("brand", "filter", "sort"):
            value = getattr(self, name)
            object.__setattr__(self, name, "" if value is None else str(value).strip())

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "Query":
        """Build a query from request parameters (``limit`` is an alias of ``size``)."""
        size = params.get("size")
        if size in (None, ""):
            size = params.get("limit")
        page = params.get("page")
        return cls(
            page=DEFAULT_PAGE if page in (None, "") else page,
            size=DEFAULT_PAGE_SIZE if size in (None, "") else size,
            brand=params.get("brand") or "",
            filter=params.get("filter") or "",
            sort=params.get("sort") or "",
        )

    def with_page(self, page: int) -> "Query":
        return Query(page=page, size=self.size, brand=self.brand, filter=self.filter, sort=self.sort)


@dataclass(frozen=True)
class Page:
    items: Tuple[Product, ...]
    current_page: int
    page_count: int
    page_size: int
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "result": [p.to_dict() for p in self.items],
            "meta": {
                "currentPage": self.current_page,
                "pageCount": self.page_count,
                "pageSize": self.page_size,
                "count": self.count,
            },
        }


@dataclass(frozen=True)
class Statistics:
    total_count: int
    matched_count: int
    brand_count: int
    new_count: int
    p50: int
    p90: int
    p95: int
    last_released_date: Union[date, str] = UNKNOWN_DATE

    def to_dict(self) -> Dict[str, Any]:
        last = self.last_released_date
        return {
            "totalCount": self.total_count,
            "matchedCount": self.matched_count,
            "brandCount": self.brand_count,
            "newCount": self.new_count,
            "p50": self.p50,
            "p90": self.p90,
            "p95": self.p95,
            "lastReleasedDate": last.isoformat() if isinstance(last, date) else last,
        }


@dataclass(frozen=True)
class RefreshReport:
    catalog_id: str
    accepted: int
    rejected: int
    duplicates: int
    total: int
