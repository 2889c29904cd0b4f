"""
Catalog store interface (Abstract Base Class).

Defines the read-only contract the search engines need from the
persistent catalog, independent of the underlying storage mechanism.
"""

from abc import ABC, abstractmethod
from typing import List

from ..domain.entities import CatalogItem, StoreFilter


class ICatalogStore(ABC):
    """
    Abstract read-only catalog store.

    Implementations must raise ``StoreUnavailableException`` for every
    backend failure so callers can apply one degrade-or-propagate policy.
    """

    @abstractmethod
    async def text_search(
        self, query: str, store_filter: StoreFilter, limit: int
    ) -> List[CatalogItem]:
        """
        Native indexed text search, best-effort ranked.

        Args:
            query: Trimmed search query
            store_filter: Visibility filter
            limit: Maximum number of items

        Returns:
            Matching items, best match first

        Raises:
            StoreUnavailableException: If the store has no usable text index
                or the read fails
        """
        pass

    @abstractmethod
    async def scan_active(self, store_filter: StoreFilter, limit: int) -> List[CatalogItem]:
        """
        Unranked bounded scan of visible items.

        Args:
            store_filter: Visibility filter
            limit: Maximum number of items

        Returns:
            Up to ``limit`` items in storage order
        """
        pass

    @abstractmethod
    async def title_prefix_or_contains(
        self, query: str, store_filter: StoreFilter, limit: int
    ) -> List[CatalogItem]:
        """
        Items whose title starts with or contains the query (case-insensitive).

        Args:
            query: Trimmed partial query
            store_filter: Visibility filter
            limit: Maximum number of items

        Returns:
            Matching items ordered by weighted rating, highest first
        """
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """
        Check that the store is reachable.

        Returns:
            True if the store answered
        """
        pass
