"""
Service layer - Search and suggestion orchestration.
"""
from .search_engine import SearchEngine
from .suggestion_engine import SuggestionEngine

__all__ = ["SearchEngine", "SuggestionEngine"]
