"""clearfashion: product catalog aggregation engine.

Public API surface. Import submodules directly for full access:
  clearfashion.processing.normalize  raw record -> canonical Product
  clearfashion.storage.repository    CatalogStore (swap-on-refresh)
  clearfashion.query.engine          filter, sort, statistics, paginate
  clearfashion.query.statistics      nearest-rank percentiles, counts
  clearfashion.ingestion.sources     DEDICATED e-shop and file sources
  clearfashion.app.service           CatalogService read/write paths
  clearfashion.app.cli               CLI entry point
"""

from .app.service import CatalogService
from .errors import CatalogError, InvalidQueryError, NormalizationError, RefreshFailure
from .models import Catalog, Page, Product, Query, Statistics
from .processing.normalize import normalize, normalize_batch
from .query.engine import evaluate


def main():
    """CLI entry point."""
    from .app.main import main as _main
    return _main()


__all__ = [
    "CatalogService",
    "Catalog",
    "Page",
    "Product",
    "Query",
    "Statistics",
    "CatalogError",
    "InvalidQueryError",
    "NormalizationError",
    "RefreshFailure",
    "normalize",
    "normalize_batch",
    "evaluate",
    "main",
]
