"""
Catalog search orchestration.

Two-tier retrieval (precise indexed search, then a bounded fuzzy scan),
relevance ranking and pagination over the ranked set.
"""

import asyncio
import logging
import time
from typing import List, Optional

from .. import metrics
from ..domain.entities import SEARCHABLE, CatalogItem, SearchPage, StoreFilter
from ..domain.exceptions import StoreUnavailableException, ValidationException
from ..repositories.catalog_store import ICatalogStore
from ..search.relevance_scorer import RelevanceScorer
from ..search.string_matcher import StringMatcher

logger = logging.getLogger(__name__)


class SearchEngine:
    """
    Catalog search service with fuzzy fallback.

    Retrieval strategy:
    1. Precise phase - store-native text search (capped)
    2. Fallback phase - only when the precise phase under-returns: scan a
       bounded slice of the catalog and keep fuzzy matches
    3. Merge (dedupe by id), rank, paginate

    Store failures in either phase degrade to an empty candidate set, so a
    broken text index or a slow scan never fails the whole request.
    """

    PRECISE_CANDIDATE_LIMIT = 100
    FALLBACK_MIN_CANDIDATES = 20
    FALLBACK_SCAN_LIMIT = 500

    def __init__(
        self,
        store: ICatalogStore,
        matcher: Optional[StringMatcher] = None,
        scorer: Optional[RelevanceScorer] = None,
        precise_limit: int = PRECISE_CANDIDATE_LIMIT,
        fallback_min_candidates: int = FALLBACK_MIN_CANDIDATES,
        fallback_scan_limit: int = FALLBACK_SCAN_LIMIT,
        deadline_seconds: float = 0.0,
        store_filter: StoreFilter = SEARCHABLE,
    ):
        """
        Initialize search engine.

        Args:
            store: Catalog store to read candidates from
            matcher: Fuzzy matcher for the fallback phase
            scorer: Relevance scorer for ranking
            precise_limit: Cap on precise-phase candidates
            fallback_min_candidates: Precise results below this trigger the fallback
            fallback_scan_limit: Cap on items scanned by the fallback
            deadline_seconds: Budget for the fallback phase, measured from the
                start of the request (0 disables)
            store_filter: Visibility filter for every store read
        """
        self.store = store
        self.matcher = matcher or StringMatcher()
        self.scorer = scorer or RelevanceScorer()
        self.precise_limit = precise_limit
        self.fallback_min_candidates = fallback_min_candidates
        self.fallback_scan_limit = fallback_scan_limit
        self.deadline_seconds = deadline_seconds
        self.store_filter = store_filter

    async def search(self, query: str, page: int = 1, limit: int = 20) -> SearchPage:
        """
        Search the catalog and return one page of ranked items.

        Args:
            query: Free-text query
            page: 1-based page number
            limit: Page size

        Returns:
            SearchPage for the requested window. A blank query yields an
            empty page, not an error.

        Raises:
            ValidationException: If page or limit is below 1
        """
        start_time = time.monotonic()

        query = (query or "").strip()
        if not query:
            return SearchPage.empty(page)

        if page < 1:
            raise ValidationException("page", page, "Page must be a positive integer")
        if limit < 1:
            raise ValidationException("limit", limit, "Limit must be a positive integer")

        candidates = await self._precise_phase(query)

        if len(candidates) < self.fallback_min_candidates:
            candidates = await self._fallback_phase(query, candidates, start_time)

        ranked = self.scorer.rank(candidates, query)
        result = SearchPage.from_ranked(ranked, page, limit)

        duration = time.monotonic() - start_time
        metrics.track_search_query("success", duration, len(ranked))
        logger.info(
            f"Search '{query}' ranked {len(ranked)} candidates, "
            f"page {page}/{result.total_pages} in {duration * 1000:.1f}ms"
        )

        return result

    async def _precise_phase(self, query: str) -> List[CatalogItem]:
        """Store-native text search; failures count as zero candidates."""
        try:
            items = await self.store.text_search(query, self.store_filter, self.precise_limit)
        except StoreUnavailableException as e:
            logger.warning(f"Precise search degraded for '{query}': {e.message}")
            metrics.track_store_failure(e.operation)
            return []

        logger.debug(f"Precise search for '{query}' returned {len(items)} items")
        return list(items)

    async def _fallback_phase(
        self, query: str, candidates: List[CatalogItem], start_time: float
    ) -> List[CatalogItem]:
        """
        Bounded fuzzy scan merged after the precise candidates.

        Args:
            query: Trimmed query
            candidates: Precise-phase candidates, kept first and in order
            start_time: Request start (time.monotonic) for the deadline

        Returns:
            Precise candidates followed by new fuzzy matches
        """
        timeout = self._remaining(start_time)
        if timeout is not None and timeout <= 0:
            logger.warning(f"Fallback skipped for '{query}': deadline already exceeded")
            metrics.track_fallback("deadline")
            return candidates

        try:
            scanned = await asyncio.wait_for(
                self.store.scan_active(self.store_filter, self.fallback_scan_limit),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"Fallback abandoned for '{query}': scan exceeded "
                f"{self.deadline_seconds:.2f}s deadline"
            )
            metrics.track_fallback("deadline")
            return candidates
        except StoreUnavailableException as e:
            logger.warning(f"Fallback scan degraded for '{query}': {e.message}")
            metrics.track_store_failure(e.operation)
            metrics.track_fallback("degraded")
            return candidates

        merged = list(candidates)
        seen_ids = {item.id for item in candidates}

        for item in scanned:
            if item.id in seen_ids:
                continue
            if self.matcher.fuzzy_match(query, item.title) or self.matcher.fuzzy_match(
                query, item.description
            ):
                merged.append(item)
                seen_ids.add(item.id)

        added = len(merged) - len(candidates)
        metrics.track_fallback("merged", added)
        logger.debug(
            f"Fallback for '{query}' scanned {len(scanned)} items, merged {added}"
        )

        return merged

    def _remaining(self, start_time: float) -> Optional[float]:
        """Seconds left before the request deadline, None when disabled."""
        if not self.deadline_seconds:
            return None
        return self.deadline_seconds - (time.monotonic() - start_time)

    def get_stats(self) -> dict:
        """
        Get engine configuration.

        Returns:
            Dictionary with retrieval caps and component settings
        """
        return {
            "precise_limit": self.precise_limit,
            "fallback_min_candidates": self.fallback_min_candidates,
            "fallback_scan_limit": self.fallback_scan_limit,
            "deadline_seconds": self.deadline_seconds,
            "matcher": self.matcher.get_stats(),
            "scorer": self.scorer.get_stats(),
        }
