"""Per-day rollups of activity records."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, Optional, Protocol, Tuple

from .models import DAILY_BUDGET_MINUTES, Category


class ActivityLike(Protocol):
    name: str
    category: Category
    duration_minutes: int


@dataclass(frozen=True)
class Rollup:
    """Totals for one day.

    ``total_minutes`` is never clamped; only ``completion_percent`` and
    ``remaining_minutes`` are bounded for display.
    """

    total_minutes: int = 0
    per_category_minutes: Dict[Category, int] = field(default_factory=dict)
    completion_percent: int = 0

    @property
    def remaining_minutes(self) -> int:
        return max(0, DAILY_BUDGET_MINUTES - self.total_minutes)


def completion_percent(total_minutes: int) -> int:
    """Share of the day logged, rounded half-up and clamped to 0-100."""
    ratio = Decimal(100 * total_minutes) / Decimal(DAILY_BUDGET_MINUTES)
    percent = int(ratio.quantize(Decimal(1), rounding=ROUND_HALF_UP))
    return min(100, max(0, percent))


def aggregate(records: Iterable[ActivityLike]) -> Rollup:
    total = 0
    per_category: Dict[Category, int] = {}
    for record in records:
        total += record.duration_minutes
        if record.duration_minutes:
            per_category[record.category] = (
                per_category.get(record.category, 0) + record.duration_minutes
            )
    return Rollup(
        total_minutes=total,
        per_category_minutes=per_category,
        completion_percent=completion_percent(total),
    )


# Quick badge shown next to the chart, keyed by the day's dominant category.
CATEGORY_HIGHLIGHTS: Dict[Optional[Category], Tuple[str, str]] = {
    Category.WORK: ("Focused & Driven", "Remember to take breaks to avoid burnout."),
    Category.LEISURE: ("Relaxed & Easygoing", "Balance fun with some productive tasks!"),
    Category.STUDY: ("Curious & Learning", "Keep it up! Consistency makes progress."),
    Category.HEALTH: ("Healthy & Active", "Nice! Don't forget hydration and good sleep."),
    Category.SLEEP: ("Restful & Recharged", "Great sleep! Now use that energy wisely."),
    Category.OTHERS: ("Balanced Day", "Good job! Try focusing a bit on goals tomorrow."),
    None: (
        "No activity today!",
        "Try adding at least one productive task to make your day meaningful!",
    ),
}


def dominant_category(rollup: Rollup) -> Optional[Category]:
    """Category with the most minutes; ties go to the earlier enum member."""
    best: Optional[Category] = None
    for category in Category:
        minutes = rollup.per_category_minutes.get(category, 0)
        if minutes and (best is None or minutes > rollup.per_category_minutes[best]):
            best = category
    return best


def category_highlight(category: Optional[Category]) -> Tuple[str, str]:
    """Return the ``(label, tip)`` badge for a dominant category."""
    return CATEGORY_HIGHLIGHTS[category]
