"""
Database models for the catalog search service.

SQLAlchemy ORM mapping of the catalog product table the search engines
read from. The service never writes to it outside of tests and seeding.
"""

from typing import Any

from sqlalchemy import Boolean, Column, DateTime, Float, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base: Any = declarative_base()


class CatalogProduct(Base):
    """
    Catalog product row.

    Attributes:
        id: Primary key identifier (string, e.g. an ObjectId or UUID)
        title: Primary-locale title
        description: Primary-locale description
        category: Category code (food, handicrafts, clothing, electronics, other)
        price: Unit price
        is_active: Whether the product is listed
        verification_status: Moderation state (pending, approved, rejected)
        weighted_rating: Bayesian-smoothed rating used for ranking
        average_rating: Plain average of review ratings
        review_count: Number of reviews
        created_at: Timestamp of creation
        updated_at: Timestamp of last update
    """

    __tablename__ = "catalog_products"

    id = Column(String(64), primary_key=True)

    title = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    category = Column(String(32), nullable=False, default="other")
    price = Column(Numeric(12, 2), nullable=False, default=0)

    is_active = Column(Boolean, nullable=False, default=True)
    verification_status = Column(String(16), nullable=False, default="pending")

    weighted_rating = Column(Float, nullable=False, default=0.0)
    average_rating = Column(Float, nullable=False, default=0.0)
    review_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    # Visibility filter + rating order used by every read
    __table_args__ = (
        Index("idx_catalog_visible_rating", "is_active", "verification_status", "weighted_rating"),
        Index("idx_catalog_category_rating", "category", "weighted_rating"),
    )

    def __repr__(self):
        return f"<CatalogProduct(id={self.id}, title={self.title!r})>"
