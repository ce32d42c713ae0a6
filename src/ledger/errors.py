"""Error kinds raised by the activity ledger."""

from __future__ import annotations

from typing import Dict, Optional


class LedgerError(Exception):
    """Base class for every ledger failure."""


class ValidationError(LedgerError):
    """A name/category/duration/date value was rejected.

    ``errors`` maps the offending field to a human readable reason.
    """

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        detail = "; ".join(f"{field}: {reason}" for field, reason in self.errors.items())
        super().__init__(f"Invalid activity data ({detail})")


class BudgetExceeded(LedgerError):
    """The write would push the day's total above the daily budget."""

    def __init__(self, available: int, requested: int):
        self.available = available
        self.requested = requested
        super().__init__(
            f"Total would exceed 1440 minutes (24 hours). "
            f"Requested: {requested} minutes, Available: {available} minutes."
        )


class NotFound(LedgerError):
    """The record does not exist or belongs to another owner."""

    def __init__(self, record_id: int):
        self.record_id = record_id
        super().__init__(f"Activity {record_id} not found")


class StorageFailure(LedgerError):
    """The underlying record store failed."""


class SummarizerFailure(LedgerError):
    """The text-generation collaborator failed or returned nothing usable."""

    user_message = "Could not analyze your day."

    def __init__(self, reason: Optional[str] = None):
        self.reason = reason
        super().__init__(reason or self.user_message)
