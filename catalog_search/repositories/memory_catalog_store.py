"""
In-memory implementation of the catalog store.

List-backed store for local development and tests. Reads return
snapshots; the engine never mutates the catalog.
"""

from typing import Iterable, List

from ..domain.entities import CatalogItem, StoreFilter
from .catalog_store import ICatalogStore


class InMemoryCatalogStore(ICatalogStore):
    """Catalog store over a fixed list of items."""

    def __init__(self, items: Iterable[CatalogItem] = ()):
        """
        Initialize store.

        Args:
            items: Catalog items in storage order
        """
        self.items: List[CatalogItem] = list(items)

    def _visible(self, store_filter: StoreFilter) -> List[CatalogItem]:
        return [item for item in self.items if store_filter.accepts(item)]

    async def text_search(
        self, query: str, store_filter: StoreFilter, limit: int
    ) -> List[CatalogItem]:
        """Items containing every query token, ordered by token hits."""
        tokens = query.lower().split()
        if not tokens:
            return []

        hits = []
        for position, item in enumerate(self._visible(store_filter)):
            words = f"{item.title} {item.description}".lower().split()
            if not all(token in words for token in tokens):
                continue
            count = sum(words.count(token) for token in tokens)
            hits.append((-count, position, item))

        hits.sort(key=lambda hit: (hit[0], hit[1]))
        return [item for _, _, item in hits[:limit]]

    async def scan_active(self, store_filter: StoreFilter, limit: int) -> List[CatalogItem]:
        """First ``limit`` visible items in storage order."""
        return self._visible(store_filter)[:limit]

    async def title_prefix_or_contains(
        self, query: str, store_filter: StoreFilter, limit: int
    ) -> List[CatalogItem]:
        """Visible items whose title contains the query, best rated first."""
        query_lower = query.lower()
        matches = [
            item for item in self._visible(store_filter) if query_lower in item.title.lower()
        ]
        matches.sort(key=lambda item: item.weighted_rating, reverse=True)
        return matches[:limit]

    async def ping(self) -> bool:
        """Always reachable."""
        return True
