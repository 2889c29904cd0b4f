"""
Database configuration and connection management.

Builds the SQLAlchemy engine and session factory for the catalog database
from application settings.
"""

import logging
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from .config import settings
from .models import Base

logger = logging.getLogger(__name__)

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def get_connect_args(db_url: str) -> dict:
    """
    Get database-specific connection arguments.

    Args:
        db_url: Database connection URL

    Returns:
        Connection arguments dict
    """
    if db_url.startswith("sqlite"):
        # Store queries run in worker threads
        return {"check_same_thread": False}
    return {}


def create_catalog_engine(db_url: str) -> Engine:
    """
    Create a SQLAlchemy engine for the catalog database.

    In-memory SQLite gets a StaticPool so every session sees the same database.

    Args:
        db_url: Database connection URL

    Returns:
        Configured engine
    """
    kwargs: dict = {"connect_args": get_connect_args(db_url), "echo": False}
    if db_url.startswith("sqlite") and ":memory:" in db_url:
        kwargs["poolclass"] = StaticPool
    elif not db_url.startswith("sqlite"):
        kwargs["pool_pre_ping"] = True

    # Sanitize for logging
    safe_url = db_url.split("@")[0] + "@..." if "@" in db_url else db_url
    logger.info(f"Using catalog database: {safe_url}")

    return create_engine(db_url, **kwargs)


def get_engine() -> Engine:
    """Get the process-wide engine, creating it on first use."""
    global _engine
    if _engine is None:
        _engine = create_catalog_engine(settings.DATABASE_URL)
    return _engine


def get_session_factory() -> sessionmaker:
    """Get the process-wide session factory."""
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _session_factory


def init_db() -> None:
    """
    Initialize database tables.

    Creates missing tables on application startup.
    """
    logger.info("Initializing catalog tables...")
    Base.metadata.create_all(bind=get_engine(), checkfirst=True)
    logger.info("Catalog database initialized")
