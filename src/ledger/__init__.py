"""Daily activity ledger: records, budget enforcement and rollups."""

from .aggregator import Rollup, aggregate, category_highlight, dominant_category
from .budget import BudgetCheck, check_budget, enforce_budget
from .errors import (
    BudgetExceeded,
    LedgerError,
    NotFound,
    StorageFailure,
    SummarizerFailure,
    ValidationError,
)
from .locks import DateLockRegistry
from .models import (
    DAILY_BUDGET_MINUTES,
    ActivityCandidate,
    ActivityPatch,
    ActivityRecord,
    Category,
    parse_date,
    validate_activity,
)
from .repository import ActivityRepository
from .service import LedgerService

__all__ = [
    "DAILY_BUDGET_MINUTES",
    "ActivityCandidate",
    "ActivityPatch",
    "ActivityRecord",
    "ActivityRepository",
    "BudgetCheck",
    "BudgetExceeded",
    "Category",
    "DateLockRegistry",
    "LedgerError",
    "LedgerService",
    "NotFound",
    "Rollup",
    "StorageFailure",
    "SummarizerFailure",
    "ValidationError",
    "aggregate",
    "category_highlight",
    "check_budget",
    "dominant_category",
    "enforce_budget",
    "parse_date",
    "validate_activity",
]
