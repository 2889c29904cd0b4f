"""
Catalog Search Service Package.

Free-text product search with typo-tolerant matching, relevance ranking
and autocomplete suggestions over an external catalog store.
"""

__version__ = "1.0.0"
__description__ = "Catalog search and relevance-ranking service"

__all__ = [
    "__version__",
]
