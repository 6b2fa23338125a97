"""DEDICATED e-shop: JSON product API and HTML listing pages."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from ...config.settings import DEDICATED_BASE_URL
from ...utils.logging import get_logger
from .base import HttpSource, SourceConfig

logger = get_logger(__name__)

DEDICATED_BRAND = "DEDICATED"


def _text(element) -> Optional[str]:
    if element is None:
        return None
    return element.get_text(" ", strip=True) or None


def parse(html: str, base_url: str = DEDICATED_BASE_URL) -> List[Dict[str, Any]]:
    """Product cards of a listing page.

    Each card gives name, price text, link and photo; missing parts are
    None and left to the normalizer to reject.
    """
    soup = BeautifulSoup(html, "lxml")
    rows = []
    for card in soup.select(".productList-container .productList"):
        anchor = card.select_one("a[href]")
        image = card.select_one("img")
        photo = None
        if image is not None:
            photo = image.get("data-src") or image.get("src")
        rows.append(
            {
                "name": _text(card.select_one(".productList-title")),
                "price": _text(card.select_one(".productList-price")),
                "link": urljoin(base_url, anchor["href"]) if anchor is not None else None,
                "photo": photo,
                "brand": DEDICATED_BRAND,
            }
        )
    return rows


def parse_products_json(body: Any, base_url: str = DEDICATED_BASE_URL) -> Optional[List[Dict[str, Any]]]:
    """Records of the ``products`` array; entries without ``canonicalUri`` are dropped."""
    if not isinstance(body, dict) or not isinstance(body.get("products"), list):
        return None

    rows = []
    for element in body["products"]:
        if not isinstance(element, dict) or not element.get("canonicalUri"):
            continue
        price = element.get("price")
        images = element.get("image") or []
        rows.append(
            {
                "link": base_url + str(element["canonicalUri"]).lstrip("/"),
                "brand": DEDICATED_BRAND,
                "price": price.get("priceAsNumber") if isinstance(price, dict) else price,
                "name": element.get("name"),
                "photo": images[0] if isinstance(images, list) and images else None,
            }
        )
    return rows


class DedicatedBrandSource(HttpSource):
    def __init__(self, cfg: SourceConfig, session=None):
        cfg = replace(
            cfg,
            brand=cfg.brand or DEDICATED_BRAND,
            base_url=cfg.base_url or DEDICATED_BASE_URL,
        )
        super().__init__(cfg, session=session)

    def scrape(self, url: str) -> Optional[List[Dict[str, Any]]]:
        html = self.fetch_text(url)
        if html is None:
            return None
        return parse(html, self.base_url)

    def fetch_products(self, url: str) -> Optional[List[Dict[str, Any]]]:
        body = self.fetch_json(url)
        if body is None:
            return None
        rows = parse_products_json(body, self.base_url)
        if rows is None:
            logger.error("[%s] unexpected payload from %s (no products array)", self.name, url)
        return rows

    def fetch(self) -> Optional[List[Dict[str, Any]]]:
        if self.cfg.mode == "html":
            rows = self.scrape(self.cfg.url)
        else:
            rows = self.fetch_products(self.cfg.url)
        if rows is not None:
            logger.info("[%s] %d raw records from %s", self.name, len(rows), self.cfg.url)
        return rows
