from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Sequence, Tuple

from ..config.settings import FETCH_WORKERS
from ..utils.logging import get_logger
from .sources.base import RecordBatch, Source

logger = get_logger(__name__)


def collect_batches(
    sources: Sequence[Source],
    workers: int = FETCH_WORKERS,
) -> Tuple[List[RecordBatch], List[str]]:
    """Fetch every source concurrently.

    Returns the batches in source order and the names of the sources that
    failed (returned None or raised).
    """
    logger.info("Fetching %d source(s)...", len(sources))
    results = {}
    failed: List[str] = []

    with ThreadPoolExecutor(max_workers=max(1, min(workers, len(sources) or 1))) as executor:
        futures = {executor.submit(source.fetch_batch): i for i, source in enumerate(sources)}
        for future in as_completed(futures):
            i = futures[future]
            name = sources[i].name
            try:
                batch = future.result()
            except Exception as e:
                logger.error("%s failed to run: %s", name, e, exc_info=True)
                batch = None
            if batch is None:
                logger.warning("[WARN] %s returned no data", name)
                failed.append(name)
            else:
                logger.info("[OK] %s: %d records", name, len(batch.records))
                results[i] = batch

    batches = [results[i] for i in sorted(results)]
    return batches, sorted(failed)
