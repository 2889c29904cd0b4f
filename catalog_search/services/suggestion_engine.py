"""
Autocomplete suggestions over catalog titles.
"""

import logging
from typing import List

from .. import metrics
from ..domain.entities import SEARCHABLE, StoreFilter, Suggestion
from ..domain.exceptions import StoreUnavailableException, ValidationException
from ..repositories.catalog_store import ICatalogStore

logger = logging.getLogger(__name__)


class SuggestionEngine:
    """
    Title-based autocomplete.

    Fetches twice the requested number of candidates (best rated first) so
    that duplicates can be dropped without coming up short.
    """

    MIN_QUERY_LENGTH = 2
    OVERFETCH_FACTOR = 2

    def __init__(self, store: ICatalogStore, store_filter: StoreFilter = SEARCHABLE):
        """
        Initialize suggestion engine.

        Args:
            store: Catalog store to read titles from
            store_filter: Visibility filter for every store read
        """
        self.store = store
        self.store_filter = store_filter

    async def suggest(self, partial_query: str, limit: int = 10) -> List[Suggestion]:
        """
        Get autocomplete suggestions for a partial query.

        Args:
            partial_query: What the user has typed so far
            limit: Maximum number of suggestions

        Returns:
            Unique (case-insensitive) title suggestions in rating order;
            empty when the query is shorter than two characters

        Raises:
            ValidationException: If limit is below 1
            StoreUnavailableException: If the store read fails
        """
        query = (partial_query or "").strip()
        if len(query) < self.MIN_QUERY_LENGTH:
            return []

        if limit < 1:
            raise ValidationException("limit", limit, "Limit must be a positive integer")

        try:
            items = await self.store.title_prefix_or_contains(
                query, self.store_filter, limit * self.OVERFETCH_FACTOR
            )
        except StoreUnavailableException:
            metrics.track_suggestions("error")
            raise

        query_lower = query.lower()
        suggestions: List[Suggestion] = []
        seen_texts = set()

        for item in items:
            title_lower = item.title.lower()
            if query_lower in title_lower and title_lower not in seen_texts:
                suggestions.append(Suggestion(text=item.title, category=item.category))
                seen_texts.add(title_lower)

            if len(suggestions) >= limit:
                break

        metrics.track_suggestions("success")
        logger.debug(f"Suggestions for '{query}': {len(suggestions)} of {len(items)} candidates")

        return suggestions
