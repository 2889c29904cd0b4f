"""
Relevance scoring system for catalog search results.

Scores candidate items from term frequency, where and how exactly the
query matched, and the item's precomputed quality rating.
"""
import logging
from typing import Iterable, List

from ..domain.entities import CatalogItem, MatchType, ScoredResult

logger = logging.getLogger(__name__)


class RelevanceScorer:
    """
    Calculate relevance scores for catalog items.

    score = term_frequency * boost * (1 + weighted_rating * RATING_WEIGHT)

    1. Term frequency - query tokens found inside title tokens (x2.0)
       and description tokens (x1.0)
    2. Boost - exact title (3.0) > title contains (2.0) >
       description contains (1.0) > fuzzy only (0.5)
    3. Rating - a small multiplicative nudge, never enough to
       override textual relevance
    """

    # Term frequency weights
    TITLE_TERM_WEIGHT = 2.0
    DESCRIPTION_TERM_WEIGHT = 1.0

    # Boost per match type
    BOOST_FACTORS = {
        MatchType.EXACT: 3.0,
        MatchType.TITLE: 2.0,
        MatchType.DESCRIPTION: 1.0,
        MatchType.FUZZY: 0.5,
    }

    RATING_WEIGHT = 0.1

    def term_frequency_score(self, item: CatalogItem, query: str) -> float:
        """
        Count query tokens appearing inside title and description tokens.

        Each title token containing a query token adds 2.0, each
        description token adds 1.0, summed over all query tokens.

        Args:
            item: Candidate item
            query: Search query

        Returns:
            Weighted term-frequency score (>= 0)
        """
        title_tokens = item.title.lower().split()
        description_tokens = item.description.lower().split()

        score = 0.0
        for query_token in query.lower().split():
            title_count = sum(1 for token in title_tokens if query_token in token)
            description_count = sum(
                1 for token in description_tokens if query_token in token
            )
            score += title_count * self.TITLE_TERM_WEIGHT
            score += description_count * self.DESCRIPTION_TERM_WEIGHT

        return score

    def match_type(self, item: CatalogItem, query: str) -> MatchType:
        """
        Classify where the whole query matched.

        Args:
            item: Candidate item
            query: Search query

        Returns:
            MatchType for the strongest match found
        """
        query_norm = query.lower().strip()
        title_norm = item.title.lower().strip()

        if title_norm == query_norm:
            return MatchType.EXACT
        if query_norm in title_norm:
            return MatchType.TITLE
        if query_norm in item.description.lower().strip():
            return MatchType.DESCRIPTION
        return MatchType.FUZZY

    def boost_factor(self, item: CatalogItem, query: str) -> float:
        """Boost multiplier for the item's match type."""
        return self.BOOST_FACTORS[self.match_type(item, query)]

    def rating_factor(self, item: CatalogItem) -> float:
        """Quality multiplier from the weighted rating."""
        return 1 + (item.weighted_rating or 0.0) * self.RATING_WEIGHT

    def score(self, item: CatalogItem, query: str) -> ScoredResult:
        """
        Calculate relevance score for a candidate item.

        Args:
            item: Candidate item
            query: Search query (already trimmed)

        Returns:
            ScoredResult with calculated score and match type
        """
        match_type = self.match_type(item, query)
        total_score = (
            self.term_frequency_score(item, query)
            * self.BOOST_FACTORS[match_type]
            * self.rating_factor(item)
        )

        return ScoredResult(item=item, score=total_score, match_type=match_type)

    def rank(self, candidates: Iterable[CatalogItem], query: str) -> List[ScoredResult]:
        """
        Score candidates and return them sorted by relevance.

        The sort is stable: items with equal scores keep the order in
        which they were retrieved.

        Args:
            candidates: Items to rank, in retrieval order
            query: Search query

        Returns:
            List of ScoredResult objects sorted by score (descending)
        """
        scored = [self.score(item, query) for item in candidates]

        scored.sort(key=lambda result: result.score, reverse=True)

        if scored:
            logger.debug(
                f"Ranked {len(scored)} candidates for '{query}', top score {scored[0].score:.3f}"
            )

        return scored

    def get_stats(self) -> dict:
        """
        Get scorer configuration.

        Returns:
            Dictionary with scorer weights
        """
        return {
            "term_weights": {
                "title": self.TITLE_TERM_WEIGHT,
                "description": self.DESCRIPTION_TERM_WEIGHT,
            },
            "boost_factors": {
                match_type.value: boost for match_type, boost in self.BOOST_FACTORS.items()
            },
            "rating_weight": self.RATING_WEIGHT,
        }
