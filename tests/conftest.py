"""
Test configuration and fixtures
"""

from unittest.mock import AsyncMock

import pytest

from catalog_search.domain.entities import Category, VerificationStatus
from catalog_search.repositories.catalog_store import ICatalogStore
from catalog_search.repositories.memory_catalog_store import InMemoryCatalogStore
from factories import make_item


@pytest.fixture
def pashmina_scarf():
    """Highly rated scarf listing."""
    return make_item(
        "a",
        "Handwoven Nepali Pashmina Scarf",
        "warm wool scarf",
        weighted_rating=4.5,
        category=Category.CLOTHING,
    )


@pytest.fixture
def black_tea():
    """Tea listing sharing one query word with the scarf."""
    return make_item(
        "b",
        "Nepali Black Tea",
        "organic tea leaves",
        weighted_rating=4.0,
        category=Category.FOOD,
    )


@pytest.fixture
def sample_catalog(pashmina_scarf, black_tea):
    """Small mixed catalog including hidden items."""
    return [
        pashmina_scarf,
        black_tea,
        make_item(
            "c",
            "Singing Bowl",
            "hand hammered brass bowl for meditation",
            weighted_rating=3.8,
            category=Category.HANDICRAFTS,
        ),
        make_item(
            "d",
            "Yak Wool Shawl",
            "soft shawl knitted from yak wool",
            weighted_rating=4.2,
            category=Category.CLOTHING,
        ),
        make_item("e", "Pashmina Scarf Inactive", "not listed", is_active=False),
        make_item(
            "f",
            "Pashmina Scarf Pending",
            "awaiting review",
            verification_status=VerificationStatus.PENDING,
        ),
    ]


@pytest.fixture
def memory_store(sample_catalog):
    """In-memory store over the sample catalog."""
    return InMemoryCatalogStore(sample_catalog)


@pytest.fixture
def mock_store():
    """Catalog store double with empty results by default."""
    store = AsyncMock(spec=ICatalogStore)
    store.text_search.return_value = []
    store.scan_active.return_value = []
    store.title_prefix_or_contains.return_value = []
    store.ping.return_value = True
    return store
