from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from ..models import Catalog, Product
from ..utils.logging import get_logger

logger = get_logger(__name__)


def dedupe_products(products: Iterable[Product]) -> Tuple[List[Product], int]:
    """Collapse products sharing a uuid, last write wins.

    The surviving product keeps the position of the first occurrence so
    input order stays meaningful for unsorted queries.
    """
    positions: Dict[str, int] = {}
    out: List[Product] = []
    duplicates = 0
    for product in products:
        pos = positions.get(product.uuid)
        if pos is None:
            positions[product.uuid] = len(out)
            out.append(product)
        else:
            out[pos] = product
            duplicates += 1
    return out, duplicates


class CatalogStore:
    """In-memory catalogs keyed by catalog id.

    Writers build a complete Catalog and publish it with a single reference
    swap of the mapping, so a reader holding the result of ``get`` always
    sees one whole refresh cycle.
    """

    def __init__(self):
        self._catalogs: Dict[str, Catalog] = {}

    def get(self, catalog_id: str) -> Catalog:
        catalog = self._catalogs.get(catalog_id)
        if catalog is None:
            return Catalog.empty(catalog_id)
        return catalog

    def replace(self, catalog_id: str, products: Iterable[Product]) -> Catalog:
        unique, duplicates = dedupe_products(products)
        if duplicates:
            logger.info("Catalog %s: %d duplicate links collapsed", catalog_id, duplicates)

        catalog = Catalog.build(catalog_id, unique)
        self._catalogs = {**self._catalogs, catalog_id: catalog}
        logger.info("Catalog %s replaced: %d products", catalog_id, len(catalog))
        return catalog

    def catalog_ids(self) -> List[str]:
        return sorted(self._catalogs)

    def __contains__(self, catalog_id: str) -> bool:
        return catalog_id in self._catalogs
