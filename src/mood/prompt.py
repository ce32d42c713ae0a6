"""
Mood prompt construction.

The prompt is a pure function of the supplied activities: same input, same
text. Nothing here talks to the model; see ``summarizer.MoodSummarizer``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from src.ledger.aggregator import ActivityLike, aggregate
from src.ledger.errors import ValidationError
from src.ledger.models import DAILY_BUDGET_MINUTES, Category

SYSTEM_INSTRUCTION = (
    "You are a helpful assistant that analyzes daily activities "
    "and provides encouraging feedback and suggestions."
)

COMPLETE_DAY_TEMPLATE = """My completed day activities: {activities}.
Give a short friendly mood summary analyzing how well I spent my day + 3 helpful suggestions for tomorrow.
Make it positive and encouraging."""

IN_PROGRESS_TEMPLATE = """My activities so far today ({total_minutes} minutes logged, {remaining_minutes} minutes remaining): {activities}.
Give a short friendly analysis of how well I'm doing so far + 3 helpful suggestions for managing the rest of my day.
Make it positive and encouraging."""


@dataclass(frozen=True, slots=True)
class MoodActivity:
    """An activity as submitted for analysis, not necessarily persisted."""

    name: str
    category: Category
    duration_minutes: int


@dataclass(frozen=True, slots=True)
class MoodPrompt:
    system: str
    prompt: str
    total_minutes: int
    remaining_minutes: int
    complete_day: bool

    def to_messages(self) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": self.system},
            {"role": "user", "content": self.prompt},
        ]


def describe_activity(activity: ActivityLike) -> str:
    category = activity.category
    label = category.value if isinstance(category, Category) else str(category)
    return f"{activity.name} ({activity.duration_minutes} mins, {label})"


def synthesize(records: Sequence[ActivityLike]) -> MoodPrompt:
    """Build the summarizer prompt for a day's activities.

    Activities are listed in the order given. A day with at least
    1440 minutes logged gets the complete-day template; anything less gets
    the in-progress template with logged and remaining minutes.

    Raises:
        ValidationError: when ``records`` is empty
    """
    if not records:
        raise ValidationError({"activities": "No activities provided"})

    total = aggregate(records).total_minutes
    remaining = max(0, DAILY_BUDGET_MINUTES - total)
    activities = ", ".join(describe_activity(record) for record in records)

    complete_day = total >= DAILY_BUDGET_MINUTES
    if complete_day:
        prompt = COMPLETE_DAY_TEMPLATE.format(activities=activities)
    else:
        prompt = IN_PROGRESS_TEMPLATE.format(
            activities=activities,
            total_minutes=total,
            remaining_minutes=remaining,
        )

    return MoodPrompt(
        system=SYSTEM_INSTRUCTION,
        prompt=prompt,
        total_minutes=total,
        remaining_minutes=remaining,
        complete_day=complete_day,
    )
