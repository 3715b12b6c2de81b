"""Domain exceptions.

Every error the catalog surfaces to callers is one of these. Routers never
see raw driver exceptions: the service translates them before they escape.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Lookup Errors
# ============================================================================


class ProductNotFoundError(DomainError):
    """Raised when no product matches an identifier or lookup term."""

    def __init__(self, term: str) -> None:
        """Initialize product not found error.

        Args:
            term: The id, title or slug that was looked up.
        """
        super().__init__(
            f"Product with term {term} not found",
            details={"term": term},
        )


# ============================================================================
# Persistence Errors
# ============================================================================


class DuplicateKeyError(DomainError):
    """Raised when a write violates a uniqueness constraint (e.g. slug)."""

    def __init__(self, detail: str) -> None:
        """Initialize duplicate key error.

        Args:
            detail: Constraint violation detail reported by the database.
        """
        super().__init__(detail, details={"constraint_detail": detail})


class InternalError(DomainError):
    """Raised for any unexpected persistence failure.

    The underlying cause is logged server-side and never exposed.
    """

    def __init__(self, message: str = "Unexpected error, check server logs") -> None:
        super().__init__(message)


# ============================================================================
# Maintenance Errors
# ============================================================================


class BulkDeleteDisabledError(DomainError):
    """Raised when bulk deletion is requested without the safety gate open."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason, details={"reason": reason})
