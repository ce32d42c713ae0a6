"""Daily budget checks."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import BudgetExceeded
from .models import DAILY_BUDGET_MINUTES

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BudgetCheck:
    allowed: bool
    available: int


def check_budget(existing_total: int, candidate_duration: int) -> BudgetCheck:
    """Decide whether ``candidate_duration`` fits on top of ``existing_total``.

    For updates the caller passes a total that already excludes the edited
    record's old duration.
    """
    available = max(0, DAILY_BUDGET_MINUTES - existing_total)
    allowed = existing_total + candidate_duration <= DAILY_BUDGET_MINUTES
    return BudgetCheck(allowed=allowed, available=available)


def enforce_budget(existing_total: int, candidate_duration: int) -> BudgetCheck:
    """Like :func:`check_budget` but raises BudgetExceeded when the write does not fit."""
    result = check_budget(existing_total, candidate_duration)
    if not result.allowed:
        logger.warning(
            "Budget exceeded: existing=%d requested=%d available=%d",
            existing_total,
            candidate_duration,
            result.available,
        )
        raise BudgetExceeded(available=result.available, requested=candidate_duration)
    return result
