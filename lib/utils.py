# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application:
# - ID normalization (Supabase returns UUIDs or ints depending on the table)
# - Value normalization for comparing stored vs. edited fields
# - ApplicationError, the base class for actionable errors
# =============================================================================

from typing import Any, Iterable
from uuid import UUID


# =============================================================================
# ID Utilities
# =============================================================================

def normalize_id(value: str | int | UUID) -> str:
    """
    Normalize a record ID to string format.

    Tables in this project use UUID primary keys, but admin_roles uses an
    integer key, and request payloads may carry either. All comparisons in
    selection sets and reconciliation happen on the string form.

    Example:
        normalize_id(uuid_obj)        # "550e8400-..."
        normalize_id("550e8400-...")  # "550e8400-..."
        normalize_id(3)               # "3"
    """
    return value if isinstance(value, str) else str(value)


def normalize_ids(values: Iterable[str | int | UUID]) -> list[str]:
    """Normalize and de-duplicate IDs, keeping first-seen order."""
    seen: dict[str, None] = {}
    for value in values:
        seen.setdefault(normalize_id(value), None)
    return list(seen)


def blank_to_none(value: Any) -> Any:
    """Treat None, "" and whitespace-only strings as the same empty value."""
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return value


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for application-specific errors.

    Provides actionable error messages:
    errors should tell HOW to fix, not just WHAT failed.

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "code": self.code,
            "message": self.message,
            "suggestion": self.suggestion,
            "details": self.details,
        }
