"""
Shared dependencies for the application.

Provides dependency injection functions used across routers.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .services.search_engine import SearchEngine
    from .services.suggestion_engine import SuggestionEngine

# Global service instances (set by main app)
_search_engine: Optional["SearchEngine"] = None
_suggestion_engine: Optional["SuggestionEngine"] = None


def set_engines(search_engine: "SearchEngine", suggestion_engine: "SuggestionEngine") -> None:
    """
    Set the global engine instances.

    Called by main app during startup.
    """
    global _search_engine, _suggestion_engine
    _search_engine = search_engine
    _suggestion_engine = suggestion_engine


async def get_search_engine() -> "SearchEngine":
    """Get search engine instance for dependency injection."""
    if _search_engine is None:
        raise RuntimeError("Search engine not initialized")
    return _search_engine


async def get_suggestion_engine() -> "SuggestionEngine":
    """Get suggestion engine instance for dependency injection."""
    if _suggestion_engine is None:
        raise RuntimeError("Suggestion engine not initialized")
    return _suggestion_engine
