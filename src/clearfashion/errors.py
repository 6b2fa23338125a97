"""Error taxonomy of the catalog pipeline."""

from typing import Iterable, Optional


class CatalogError(Exception):
    """Base class for every error raised by clearfashion."""


class NormalizationError(CatalogError):
    """A raw record cannot become a Product. Skip it, keep the batch going."""

    def __init__(self, problems: Iterable[str], record: Optional[dict] = None):
        self.problems = list(problems)
        self.record = record
        super().__init__("invalid raw record: " + ", ".join(self.problems))


class InvalidQueryError(CatalogError, ValueError):
    """Query parameters out of range or not numeric."""


class RefreshFailure(CatalogError):
    """A refresh produced nothing usable; the previous catalog is kept."""

    def __init__(self, catalog_id: str, reason: str):
        self.catalog_id = catalog_id
        self.reason = reason
        super().__init__(f"refresh of catalog '{catalog_id}' failed: {reason}")
