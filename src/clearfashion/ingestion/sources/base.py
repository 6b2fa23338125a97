from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ...config.settings import DEFAULT_HEADERS, HTTP_BACKOFF, HTTP_RETRIES, HTTP_TIMEOUT
from ...utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class SourceConfig:
    name: str
    url: str
    brand: Optional[str] = None
    mode: str = "api"                   # api (JSON) | html
    base_url: Optional[str] = None
    timeout: float = HTTP_TIMEOUT
    retries: int = HTTP_RETRIES
    backoff: float = HTTP_BACKOFF
    headers: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))


@dataclass
class RecordBatch:
    """Raw records of one source plus what the normalizer needs to read them."""

    source: str
    records: List[Dict[str, Any]]
    brand: Optional[str] = None
    base_url: Optional[str] = None


class Source:
    """A scrape/fetch collaborator.

    ``fetch`` returns the raw records, or None on unrecoverable failure.
    """

    name = "source"
    brand: Optional[str] = None
    base_url: Optional[str] = None

    def fetch(self) -> Optional[List[Dict[str, Any]]]:
        raise NotImplementedError

    def fetch_batch(self) -> Optional[RecordBatch]:
        records = self.fetch()
        if records is None:
            return None
        return RecordBatch(self.name, records, brand=self.brand, base_url=self.base_url)


def build_session(cfg: SourceConfig) -> requests.Session:
    session = requests.Session()
    session.headers.update(cfg.headers)
    retry = Retry(
        total=cfg.retries,
        backoff_factor=cfg.backoff,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET"],
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


class HttpSource(Source):
    def __init__(self, cfg: SourceConfig, session: Optional[requests.Session] = None):
        self.cfg = cfg
        self.name = cfg.name
        self.brand = cfg.brand
        self.base_url = cfg.base_url or cfg.url
        self.sess = session or build_session(cfg)

    def get(self, url: str) -> Optional[requests.Response]:
        try:
            r = self.sess.get(url, timeout=self.cfg.timeout)
            r.raise_for_status()
            return r
        except requests.RequestException as exc:
            logger.error("[%s] fetch failed url=%s err=%s", self.name, url, exc)
            return None

    def fetch_text(self, url: str) -> Optional[str]:
        r = self.get(url)
        return None if r is None else r.text

    def fetch_json(self, url: str) -> Optional[Any]:
        r = self.get(url)
        if r is None:
            return None
        try:
            return r.json()
        except ValueError as exc:
            logger.error("[%s] invalid JSON from %s: %s", self.name, url, exc)
            return None
