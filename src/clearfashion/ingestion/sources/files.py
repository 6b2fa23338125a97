from pathlib import Path
from typing import Any, Dict, List, Optional

from ...processing.read import read_records
from ...utils.logging import get_logger
from .base import Source

logger = get_logger(__name__)


class FileSource(Source):
    """Raw records captured earlier by a scraper and saved to disk."""

    def __init__(self, path, brand: Optional[str] = None, base_url: Optional[str] = None):
        self.path = Path(path)
        self.name = self.path.stem
        self.brand = brand
        self.base_url = base_url

    def fetch(self) -> Optional[List[Dict[str, Any]]]:
        try:
            return read_records(self.path)
        except (OSError, ValueError) as exc:
            logger.error("%s could not be read: %s", self.path, exc)
            return None
