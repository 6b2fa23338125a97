"""Read and write paths offered to the presentation layer.

``evaluate`` and ``brands`` read one catalog snapshot; ``refresh`` and
``refresh_from_sources`` are the only writers and either publish a complete
new catalog or raise RefreshFailure leaving the previous one in place.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..config.settings import DEFAULT_CATALOG_ID, FETCH_WORKERS
from ..errors import RefreshFailure
from ..ingestion.orchestrator import collect_batches
from ..ingestion.sources.base import RecordBatch, Source
from ..models import Catalog, Page, Query, RefreshReport, Statistics
from ..processing.normalize import normalize_batch
from ..query.engine import evaluate, list_brands
from ..storage.repository import CatalogStore
from ..utils.logging import get_logger

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CatalogService:
    def __init__(
        self,
        store: Optional[CatalogStore] = None,
        catalog_id: str = DEFAULT_CATALOG_ID,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.store = store if store is not None else CatalogStore()
        self.catalog_id = catalog_id
        self.clock = clock

    @property
    def catalog(self) -> Catalog:
        return self.store.get(self.catalog_id)

    # -- read path -------------------------------------------------------

    def evaluate(self, query: Query) -> Tuple[Page, Statistics]:
        return evaluate(self.catalog, query, now=self.clock())

    def evaluate_params(self, params: Mapping[str, Any]) -> Tuple[Page, Statistics]:
        """``evaluate`` for raw request parameters; raises InvalidQueryError."""
        return self.evaluate(Query.from_params(params))

    def brands(self) -> List[str]:
        return list_brands(self.catalog)

    # -- write path ------------------------------------------------------

    def _fail(self, reason: str) -> RefreshFailure:
        logger.error("Refresh of %s failed: %s (keeping %d products)",
                     self.catalog_id, reason, len(self.catalog))
        return RefreshFailure(self.catalog_id, reason)

    def refresh(
        self,
        records: Optional[Iterable[Mapping[str, Any]]],
        brand: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> RefreshReport:
        """Normalize ``records`` and replace the catalog with them.

        None or an empty sequence means the upstream fetch failed.
        """
        if records is None:
            raise self._fail("source returned no data")
        return self.refresh_batches([RecordBatch("records", list(records), brand, base_url)])

    def refresh_batches(self, batches: Sequence[RecordBatch]) -> RefreshReport:
        total = sum(len(b.records) for b in batches)
        if total == 0:
            raise self._fail("no records fetched")

        ingested_on: date = self.clock().date()
        products = []
        rejected = 0
        for batch in batches:
            accepted, skipped = normalize_batch(
                batch.records, brand=batch.brand, base_url=batch.base_url, ingested_on=ingested_on,
            )
            products.extend(accepted)
            rejected += len(skipped)

        if not products:
            raise self._fail(f"all {total} records were rejected")

        catalog = self.store.replace(self.catalog_id, products)
        report = RefreshReport(
            catalog_id=self.catalog_id,
            accepted=len(catalog),
            rejected=rejected,
            duplicates=len(products) - len(catalog),
            total=total,
        )
        logger.info(
            "Refresh of %s done: %d products (%d rejected, %d duplicates) from %d records",
            self.catalog_id, report.accepted, report.rejected, report.duplicates, report.total,
        )
        return report

    def refresh_from_sources(self, sources: Sequence[Source], workers: int = FETCH_WORKERS) -> RefreshReport:
        """Fetch all sources; any failed source fails the whole refresh."""
        if not sources:
            raise self._fail("no sources configured")
        batches, failed = collect_batches(sources, workers=workers)
        if failed:
            raise self._fail("sources failed: " + ", ".join(failed))
        return self.refresh_batches(batches)
