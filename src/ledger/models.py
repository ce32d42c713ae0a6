from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date as date_type, datetime
from enum import Enum
from typing import Any, Dict, Optional

from .errors import ValidationError

DAILY_BUDGET_MINUTES = 1440

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class Category(str, Enum):
    """Closed set of activity categories."""

    WORK = "Work"
    STUDY = "Study"
    HEALTH = "Health"
    SLEEP = "Sleep"
    LEISURE = "Leisure"
    OTHERS = "Others"


@dataclass(slots=True)
class ActivityRecord:
    """A persisted activity belonging to one owner on one calendar date."""

    id: int
    owner_id: str
    name: str
    category: Category
    duration_minutes: int
    date: str
    created_at: str
    updated_at: str


@dataclass(frozen=True, slots=True)
class ActivityCandidate:
    """Validated values for a record that is about to be written."""

    name: str
    category: Category
    duration_minutes: int
    date: str


@dataclass(frozen=True, slots=True)
class ActivityPatch:
    """Partial update; ``None`` means the field was not supplied."""

    name: Optional[str] = None
    category: Optional[Any] = None
    duration_minutes: Optional[Any] = None
    date: Optional[Any] = None

    def is_empty(self) -> bool:
        return (
            self.name is None
            and self.category is None
            and self.duration_minutes is None
            and self.date is None
        )

    def apply(self, record: ActivityRecord) -> ActivityCandidate:
        """Merge the supplied fields over ``record`` and re-validate the result."""
        return validate_activity(
            name=record.name if self.name is None else self.name,
            category=record.category if self.category is None else self.category,
            duration=record.duration_minutes
            if self.duration_minutes is None
            else self.duration_minutes,
            date=record.date if self.date is None else self.date,
        )


def _date_error(value: Any) -> Optional[str]:
    if isinstance(value, datetime):
        return "must be a calendar date, not a timestamp"
    if isinstance(value, date_type):
        return None
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        return "must match YYYY-MM-DD"
    try:
        date_type.fromisoformat(value)
    except ValueError:
        return f"{value} is not a real calendar date"
    return None


def parse_date(value: Any) -> str:
    """Return ``value`` as a ``YYYY-MM-DD`` string or raise ValidationError."""
    error = _date_error(value)
    if error:
        raise ValidationError({"date": error})
    if isinstance(value, date_type):
        return value.isoformat()
    return value


def parse_category(value: Any) -> Category:
    """Resolve an exact category name; anything outside the set is rejected."""
    if isinstance(value, Category):
        return value
    try:
        return Category(value)
    except ValueError:
        allowed = ", ".join(c.value for c in Category)
        raise ValidationError({"category": f"must be one of {allowed}"}) from None


def validate_activity(name: Any, category: Any, duration: Any, date: Any) -> ActivityCandidate:
    """Validate raw activity values.

    Every field is checked and all failures are reported together. Values are
    never coerced: ``30.0`` or ``"30"`` are rejected as durations. The only
    normalisation is stripping whitespace around the name.

    Raises:
        ValidationError: one entry per rejected field
    """
    errors: Dict[str, str] = {}

    clean_name = name.strip() if isinstance(name, str) else ""
    if not clean_name:
        errors["name"] = "must be a non-empty string"

    resolved_category: Optional[Category] = None
    try:
        resolved_category = parse_category(category)
    except ValidationError as exc:
        errors.update(exc.errors)

    if isinstance(duration, bool) or not isinstance(duration, int):
        errors["duration"] = "must be an integer number of minutes"
    elif duration <= 0:
        errors["duration"] = "must be greater than 0"

    date_error = _date_error(date)
    if date_error:
        errors["date"] = date_error

    if errors:
        raise ValidationError(errors)

    return ActivityCandidate(
        name=clean_name,
        category=resolved_category,
        duration_minutes=duration,
        date=parse_date(date),
    )
