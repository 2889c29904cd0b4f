"""
Custom exceptions for the catalog search domain.

These exceptions represent domain-level errors and are independent
of infrastructure concerns (HTTP, database, etc.).
"""

from typing import Any, Optional


class CatalogSearchException(Exception):
    """Base exception for all catalog search errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class StoreUnavailableException(CatalogSearchException):
    """Raised when a catalog store read fails."""

    def __init__(self, operation: str, reason: Optional[str] = None):
        message = f"Catalog store {operation} failed"
        if reason:
            message += f": {reason}"
        self.operation = operation
        super().__init__(
            message=message, details={"operation": operation, "reason": reason}
        )


class ValidationException(CatalogSearchException):
    """Raised when input validation fails."""

    def __init__(self, field: str, value: Any, reason: str):
        message = f"Validation failed for {field}: {reason}"
        self.field = field
        super().__init__(
            message=message,
            details={"field": field, "value": str(value), "reason": reason},
        )

    @property
    def code(self) -> str:
        """Machine-readable error code, e.g. ``INVALID_LIMIT``."""
        return f"INVALID_{self.field.upper()}"
