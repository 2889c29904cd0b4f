"""
SQLAlchemy implementation of the catalog store.

Reads catalog products from a relational database. Full-text search uses
PostgreSQL's text search; other dialects have no text index and report
the precise search as unavailable.
"""

import asyncio
import logging
from decimal import Decimal
from typing import Callable, List, TypeVar

from sqlalchemy import func, literal_column, or_, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..domain.entities import Category, CatalogItem, StoreFilter, VerificationStatus
from ..domain.exceptions import StoreUnavailableException
from ..models import CatalogProduct
from .catalog_store import ICatalogStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Text search configuration for to_tsvector / plainto_tsquery
TS_CONFIG = "english"


class SqlCatalogStore(ICatalogStore):
    """SQLAlchemy catalog store. Queries run in a worker thread."""

    def __init__(self, session_factory: sessionmaker, statement_timeout_ms: int = 0):
        """
        Initialize store.

        Args:
            session_factory: SQLAlchemy session factory bound to the catalog database
            statement_timeout_ms: Server-side cap on each read (PostgreSQL only, 0 disables)
        """
        self.session_factory = session_factory
        self.statement_timeout_ms = statement_timeout_ms

    async def _run(self, operation: str, work: Callable[[Session], T]) -> T:
        """Run a read in a fresh session off the event loop."""

        def call() -> T:
            with self.session_factory() as db:
                self._apply_statement_timeout(db)
                return work(db)

        try:
            return await asyncio.to_thread(call)
        except SQLAlchemyError as e:
            logger.error(f"Catalog store {operation} failed: {e}")
            raise StoreUnavailableException(operation, str(e))

    def _apply_statement_timeout(self, db: Session) -> None:
        """Let PostgreSQL cancel reads that outlive the caller's deadline."""
        if not self.statement_timeout_ms:
            return
        if db.get_bind().dialect.name != "postgresql":
            return
        # SET does not take bind parameters
        db.execute(text(f"SET LOCAL statement_timeout = {int(self.statement_timeout_ms)}"))

    @staticmethod
    def _visible(statement, store_filter: StoreFilter):
        return statement.where(
            CatalogProduct.is_active.is_(store_filter.is_active),
            CatalogProduct.verification_status == store_filter.verification_status.value,
        )

    async def text_search(
        self, query: str, store_filter: StoreFilter, limit: int
    ) -> List[CatalogItem]:
        """Full-text search ranked by ts_rank (PostgreSQL only)."""

        def work(db: Session) -> List[CatalogItem]:
            dialect = db.get_bind().dialect.name
            if dialect != "postgresql":
                raise StoreUnavailableException(
                    "text_search", f"no full-text index on dialect '{dialect}'"
                )

            statement = self._text_search_statement(query, store_filter, limit)
            return [self._map_to_entity(row) for row in db.scalars(statement)]

        return await self._run("text_search", work)

    @classmethod
    def _text_search_statement(cls, query: str, store_filter: StoreFilter, limit: int):
        """Build the PostgreSQL full-text query, best ts_rank first."""
        document = func.to_tsvector(
            literal_column(f"'{TS_CONFIG}'"),
            CatalogProduct.title + " " + CatalogProduct.description,
        )
        ts_query = func.plainto_tsquery(literal_column(f"'{TS_CONFIG}'"), query)
        return (
            cls._visible(select(CatalogProduct), store_filter)
            .where(document.op("@@")(ts_query))
            .order_by(func.ts_rank(document, ts_query).desc())
            .limit(limit)
        )

    async def scan_active(self, store_filter: StoreFilter, limit: int) -> List[CatalogItem]:
        """Bounded scan of visible products in primary-key order."""

        def work(db: Session) -> List[CatalogItem]:
            statement = (
                self._visible(select(CatalogProduct), store_filter)
                .order_by(CatalogProduct.id)
                .limit(limit)
            )
            return [self._map_to_entity(row) for row in db.scalars(statement)]

        return await self._run("scan_active", work)

    async def title_prefix_or_contains(
        self, query: str, store_filter: StoreFilter, limit: int
    ) -> List[CatalogItem]:
        """Case-insensitive title prefix/contains match, best rated first."""
        query_lower = query.lower()

        def work(db: Session) -> List[CatalogItem]:
            title = func.lower(CatalogProduct.title)
            statement = (
                self._visible(select(CatalogProduct), store_filter)
                .where(
                    or_(
                        title.startswith(query_lower, autoescape=True),
                        title.contains(query_lower, autoescape=True),
                    )
                )
                .order_by(CatalogProduct.weighted_rating.desc(), CatalogProduct.id)
                .limit(limit)
            )
            return [self._map_to_entity(row) for row in db.scalars(statement)]

        return await self._run("title_prefix_or_contains", work)

    async def ping(self) -> bool:
        """Run a trivial query."""
        try:
            await self._run("ping", lambda db: db.execute(select(1)).scalar())
            return True
        except StoreUnavailableException:
            return False

    def _map_to_entity(self, row: CatalogProduct) -> CatalogItem:
        """Map database model to domain entity."""
        return CatalogItem(
            id=str(row.id),
            title=row.title or "",
            description=row.description or "",
            category=self._map_category(row.category),
            price=Decimal(str(row.price or 0)),
            is_active=bool(row.is_active),
            verification_status=VerificationStatus(row.verification_status),
            weighted_rating=float(row.weighted_rating or 0.0),
            average_rating=float(row.average_rating or 0.0),
            review_count=int(row.review_count or 0),
        )

    @staticmethod
    def _map_category(value: str) -> Category:
        """Unknown category codes fall back to OTHER."""
        try:
            return Category(value)
        except ValueError:
            return Category.OTHER
