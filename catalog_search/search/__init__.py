"""
Search module for catalog relevance ranking.

Provides fuzzy matching and relevance scoring for catalog items.
"""
from .relevance_scorer import RelevanceScorer
from .string_matcher import StringMatcher

__all__ = [
    "RelevanceScorer",
    "StringMatcher",
]
