"""
Configuration module for the catalog search service.

This module provides centralized configuration management using Pydantic settings.
All configuration values can be overridden via environment variables or .env file.
"""

from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings for the catalog search service.

    Attributes:
        SERVICE_NAME: Name used in logs and service info
        DATABASE_URL: SQLAlchemy URL of the catalog database
        STORE_BACKEND: Catalog store adapter (sql or memory)
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        LOG_JSON: Render logs as JSON instead of console output
        PRECISE_CANDIDATE_LIMIT: Cap on precise-phase candidates
        FALLBACK_MIN_CANDIDATES: Precise results below this trigger the fuzzy fallback
        FALLBACK_SCAN_LIMIT: Cap on items scanned by the fuzzy fallback
        FUZZY_THRESHOLD: Maximum edit distance for fuzzy matches
        SEARCH_DEADLINE_SECONDS: Per-request deadline for the fallback phase (0 disables)
        DEFAULT_PAGE_SIZE: Search page size when none is given
        MAX_PAGE_SIZE: Largest accepted search page size
        DEFAULT_SUGGESTION_LIMIT: Suggestion count when none is given
        MAX_SUGGESTION_LIMIT: Largest accepted suggestion count
        CORS_ORIGINS: Comma-separated allowed origins
    """

    SERVICE_NAME: str = Field(default="catalog-search", description="Service name")

    # Storage
    DATABASE_URL: str = Field(
        default="sqlite:///./catalog.db",
        description="SQLAlchemy URL of the catalog database",
    )
    STORE_BACKEND: Literal["sql", "memory"] = Field(
        default="sql",
        description="Catalog store adapter",
    )

    # Logging configuration
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    LOG_JSON: bool = Field(default=True, description="Render logs as JSON")

    # Retrieval
    PRECISE_CANDIDATE_LIMIT: int = Field(default=100, ge=1, le=1000)
    FALLBACK_MIN_CANDIDATES: int = Field(default=20, ge=0)
    FALLBACK_SCAN_LIMIT: int = Field(default=500, ge=1, le=5000)
    FUZZY_THRESHOLD: int = Field(default=2, ge=0, le=5)
    SEARCH_DEADLINE_SECONDS: float = Field(
        default=2.0,
        ge=0,
        le=30.0,
        description="Deadline for the fallback phase, measured from request start",
    )

    # Pagination
    DEFAULT_PAGE_SIZE: int = Field(default=20, ge=1)
    MAX_PAGE_SIZE: int = Field(default=100, ge=1)
    DEFAULT_SUGGESTION_LIMIT: int = Field(default=10, ge=1)
    MAX_SUGGESTION_LIMIT: int = Field(default=50, ge=1)

    CORS_ORIGINS: str = Field(default="*", description="Comma-separated allowed origins")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, value: str) -> str:
        """
        Validate that the database URL names a driver.

        Raises:
            ValueError: If URL is empty or has no scheme
        """
        if not value or "://" not in value:
            raise ValueError(f"DATABASE_URL must be a SQLAlchemy URL, got: {value!r}")
        return value

    @model_validator(mode="after")
    def validate_limits(self) -> "Settings":
        """Defaults must not exceed their maximums."""
        if self.DEFAULT_PAGE_SIZE > self.MAX_PAGE_SIZE:
            raise ValueError("DEFAULT_PAGE_SIZE cannot exceed MAX_PAGE_SIZE")
        if self.DEFAULT_SUGGESTION_LIMIT > self.MAX_SUGGESTION_LIMIT:
            raise ValueError(
                "DEFAULT_SUGGESTION_LIMIT cannot exceed MAX_SUGGESTION_LIMIT"
            )
        return self

    @property
    def cors_origins(self) -> list[str]:
        """Allowed CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


# Global settings instance
settings = Settings()
