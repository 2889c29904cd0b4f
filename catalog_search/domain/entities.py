"""
Domain entities for catalog search.

Core value objects for catalog items, ranked results, result pages and
autocomplete suggestions. All of them live for a single request only.
"""

import math
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import List, Optional


class VerificationStatus(str, Enum):
    """Moderation state of a catalog item."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Category(str, Enum):
    """Catalog categories."""

    FOOD = "food"
    HANDICRAFTS = "handicrafts"
    CLOTHING = "clothing"
    ELECTRONICS = "electronics"
    OTHER = "other"


class MatchType(str, Enum):
    """Boost tier that applied when an item was scored."""

    EXACT = "exact"
    TITLE = "title"
    DESCRIPTION = "description"
    FUZZY = "fuzzy"


@dataclass(frozen=True)
class StoreFilter:
    """
    Visibility filter passed to every catalog store read.

    Only active, approved items are searchable.
    """

    is_active: bool = True
    verification_status: VerificationStatus = VerificationStatus.APPROVED

    def accepts(self, item: "CatalogItem") -> bool:
        """Check whether an item passes this filter."""
        return (
            item.is_active == self.is_active
            and item.verification_status == self.verification_status
        )


SEARCHABLE = StoreFilter()


@dataclass(frozen=True)
class CatalogItem:
    """
    Read-only view of a catalog product.

    Owned by the external catalog store. ``title`` and ``description`` hold
    primary-locale text; ``weighted_rating`` is the precomputed,
    Bayesian-smoothed quality signal.
    """

    id: str
    title: str
    description: str
    category: Category = Category.OTHER
    price: Decimal = Decimal("0")
    is_active: bool = True
    verification_status: VerificationStatus = VerificationStatus.APPROVED
    weighted_rating: float = 0.0
    average_rating: float = 0.0
    review_count: int = 0

    def __post_init__(self):
        """Validate item data."""
        if not self.id:
            raise ValueError("Catalog item id is required")
        if self.price < 0:
            raise ValueError("Price cannot be negative")
        if self.weighted_rating < 0:
            raise ValueError("Weighted rating cannot be negative")

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category.value,
            "price": float(self.price),
            "isActive": self.is_active,
            "verificationStatus": self.verification_status.value,
            "weightedRating": self.weighted_rating,
            "averageRating": self.average_rating,
            "reviewCount": self.review_count,
        }


@dataclass
class ScoredResult:
    """
    Container for a catalog item with its relevance score.

    Attributes:
        item: The candidate item
        score: Relevance score (unbounded, higher is better)
        match_type: Boost tier that applied (exact, title, description, fuzzy)
    """

    item: CatalogItem
    score: float
    match_type: MatchType = MatchType.FUZZY

    def to_dict(self) -> dict:
        """Convert to dictionary for debugging and API responses."""
        result = self.item.to_dict()
        result["_relevance"] = {
            "score": round(self.score, 4),
            "match_type": self.match_type.value,
        }
        return result


@dataclass
class SearchPage:
    """One page of a ranked search result set."""

    items: List[CatalogItem]
    total_count: int
    total_pages: int
    current_page: int

    @classmethod
    def empty(cls, page: int) -> "SearchPage":
        """Build a well-formed page with no results."""
        return cls(items=[], total_count=0, total_pages=0, current_page=page)

    @classmethod
    def from_ranked(
        cls, ranked: List[ScoredResult], page: int, limit: int
    ) -> "SearchPage":
        """
        Slice the page window out of a fully ranked result set.

        Args:
            ranked: All scored results, best first
            page: 1-based page number
            limit: Page size (must be positive)

        Returns:
            SearchPage holding ``ranked[(page-1)*limit : page*limit]``
        """
        total_count = len(ranked)
        skip = (page - 1) * limit
        window = ranked[skip : skip + limit]

        return cls(
            items=[result.item for result in window],
            total_count=total_count,
            total_pages=math.ceil(total_count / limit),
            current_page=page,
        )

    def to_dict(self) -> dict:
        """Convert to the HTTP response payload."""
        return {
            "products": [item.to_dict() for item in self.items],
            "totalPages": self.total_pages,
            "currentPage": self.current_page,
            "totalCount": self.total_count,
        }


@dataclass(frozen=True)
class Suggestion:
    """Autocomplete suggestion."""

    text: str
    category: Optional[Category] = field(default=None)

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        result: dict = {"text": self.text}
        if self.category is not None:
            result["category"] = self.category.value
        return result
