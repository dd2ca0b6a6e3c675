"""
Error taxonomy shared by every depot app.

Services raise these; the HTTP layer maps them to status codes in one place
(`depotdb.main`). None of them is retried automatically.
"""

from __future__ import annotations

from typing import Optional


class DepotError(Exception):
    """Base class for errors a caller is expected to present and act on."""

    code = "depot_error"

    def __init__(self, message: str, *, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class ValidationError(DepotError):
    """Malformed or out-of-range input."""

    code = "validation_error"


class NotFound(DepotError):
    """The referenced record does not exist."""

    code = "not_found"


class InsufficientStock(DepotError):
    """A fuel draw larger than the current tank balance."""

    code = "insufficient_stock"

    def __init__(self, message: str, *, available=None, requested=None) -> None:
        super().__init__(message, field="amount")
        self.available = available
        self.requested = requested


class Conflict(DepotError):
    """Stale revision on update, or an idempotency key reused with a different payload."""

    code = "conflict"


class StorageUnavailable(DepotError):
    """The backing store could not be reached; nothing was applied."""

    code = "storage_unavailable"
