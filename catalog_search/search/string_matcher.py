"""
Approximate string matching for catalog search.

Provides typo-tolerant matching of free-text queries against item
titles and descriptions using Levenshtein edit distance.
"""

from typing import List, Optional

from rapidfuzz.distance import Levenshtein


class StringMatcher:
    """
    Substring and edit-distance matching for catalog text.

    A query matches a text when:
    - the text contains the query (case-insensitive), or
    - some whitespace token of the text is within ``threshold`` edits of
      the query, or
    - some ``len(query)``-wide window inside a token is within
      ``threshold`` edits of the query (typos inside compound words)
    """

    DEFAULT_THRESHOLD = 2

    # Tokens shorter than this are too noisy to compare
    MIN_TOKEN_LENGTH = 3

    def __init__(self, threshold: int = DEFAULT_THRESHOLD):
        """
        Initialize string matcher.

        Args:
            threshold: Maximum edit distance accepted as a fuzzy match
        """
        if threshold < 0:
            raise ValueError("Threshold cannot be negative")
        self.threshold = threshold

    @staticmethod
    def edit_distance(a: str, b: str) -> int:
        """
        Case-insensitive Levenshtein distance.

        Insertions, deletions and substitutions each cost 1.

        Examples:
            edit_distance("scarf", "SCARF") -> 0
            edit_distance("", "tea") -> 3
            edit_distance("nepal", "nepali") -> 1
        """
        return Levenshtein.distance(a.lower(), b.lower())

    def fuzzy_match(self, query: str, text: str, threshold: Optional[int] = None) -> bool:
        """
        Check if query matches text with typo tolerance.

        Args:
            query: Search query (e.g., "pashmna")
            text: Text to search in (e.g., "Handwoven Pashmina Scarf")
            threshold: Maximum edit distance, defaults to the instance threshold

        Returns:
            True if the text contains the query or a token is close enough
        """
        if threshold is None:
            threshold = self.threshold

        query_lower = query.lower()
        text_lower = text.lower()

        if query_lower in text_lower:
            return True

        window = len(query_lower)

        for token in self.tokenize(text_lower):
            if len(token) < self.MIN_TOKEN_LENGTH:
                continue

            if self._within(query_lower, token, threshold):
                return True

            if len(token) >= window:
                for start in range(len(token) - window + 1):
                    if self._within(query_lower, token[start : start + window], threshold):
                        return True

        return False

    @staticmethod
    def tokenize(text: str) -> List[str]:
        """Split text on runs of whitespace."""
        return text.split()

    @staticmethod
    def _within(a: str, b: str, threshold: int) -> bool:
        # score_cutoff lets rapidfuzz stop as soon as the distance exceeds threshold
        return Levenshtein.distance(a, b, score_cutoff=threshold) <= threshold

    def get_stats(self) -> dict:
        """
        Get matcher configuration.

        Returns:
            Dictionary with matcher settings
        """
        return {
            "threshold": self.threshold,
            "min_token_length": self.MIN_TOKEN_LENGTH,
            "algorithm": "rapidfuzz-levenshtein",
        }
