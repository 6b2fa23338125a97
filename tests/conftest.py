"""Shared fixtures for the clearfashion test suite."""

import sys
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import pytest

# Ensure src/ is on the path so "import clearfashion" works when running from repo root.
repo_root = Path(__file__).resolve().parents[1]
src_path = repo_root / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from clearfashion.models import Catalog  # noqa: E402
from clearfashion.processing.normalize import normalize  # noqa: E402

TODAY = date(2024, 3, 20)
NOW = datetime(2024, 3, 20, 12, 0, tzinfo=timezone.utc)


def days_ago(n: int) -> date:
    return TODAY - timedelta(days=n)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def raw_record():
    """A raw record as the DEDICATED product API adapter hands it over."""
    return {
        "link": "https://www.dedicatedbrand.com/en/men/news/t-shirt-stockholm-base-black",
        "brand": "DEDICATED",
        "price": 29,
        "name": "  T-shirt Stockholm\n   Base  Black ",
        "photo": "https://dedicated.imgix.net/base-black.jpg",
    }


@pytest.fixture
def make_product():
    """Factory: normalized Product with sensible defaults."""
    counter = {"n": 0}

    def _make(price=25, released=TODAY, brand="DEDICATED", name=None, link=None):
        counter["n"] += 1
        n = counter["n"]
        return normalize(
            {
                "link": link or f"https://shop.example.com/products/item-{n}",
                "name": name or f"Item {n}",
                "price": price,
                "brand": brand,
                "released": released,
            }
        )

    return _make


@pytest.fixture
def scenario_catalog(make_product):
    """Three products: 10 today, 60 thirty days ago, 30 five days ago."""
    products = [
        make_product(price=10, released=TODAY),
        make_product(price=60, released=days_ago(30)),
        make_product(price=30, released=days_ago(5)),
    ]
    return Catalog.build("scenario", products)


@pytest.fixture
def mixed_catalog(make_product):
    """Eight products over three brands with ties on price and date."""
    products = [
        make_product(price=45, released=days_ago(1), brand="DEDICATED"),
        make_product(price=80, released=days_ago(40), brand="ADRESSE"),
        make_product(price=45, released=days_ago(20), brand="MONTLIMART"),
        make_product(price=12, released=days_ago(3), brand="DEDICATED"),
        make_product(price=120, released=days_ago(14), brand="ADRESSE"),
        make_product(price=49, released=days_ago(15), brand="DEDICATED"),
        make_product(price=50, released=days_ago(1), brand="MONTLIMART"),
        make_product(price=0, released=days_ago(60), brand="DEDICATED"),
    ]
    return Catalog.build("mixed", products)
