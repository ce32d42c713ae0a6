"""
LedgerService: the single entry point for reading and writing activities.

Every operation takes the owner explicitly. The budget check and the write
happen in one database transaction (``ActivityRepository.*_within_budget``),
so concurrent writers, in this process or another one sharing the database,
cannot both pass the check and jointly exceed the budget. Within a process,
writers to the same (owner, date) also queue on a per-date lock.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from .aggregator import Rollup, aggregate
from .errors import NotFound
from .locks import DateLockRegistry
from .models import ActivityPatch, ActivityRecord, parse_date, validate_activity
from .repository import ActivityRepository

logger = logging.getLogger(__name__)


class LedgerService:
    """Orchestrates validation, budget enforcement, persistence and rollups."""

    def __init__(
        self,
        repository: ActivityRepository,
        locks: Optional[DateLockRegistry] = None,
    ):
        """
        Args:
            repository: Record store (injectable for tests)
            locks: Lock registry; share one instance between services in
                the same process
        """
        self.repository = repository
        self.locks = locks or DateLockRegistry()

    def list_by_date(self, owner_id: str, date: Any) -> List[ActivityRecord]:
        """Records for ``(owner_id, date)`` in creation order; empty list if none."""
        return self.repository.list_by_date(owner_id, parse_date(date))

    def add(
        self, owner_id: str, name: Any, category: Any, duration: Any, date: Any
    ) -> ActivityRecord:
        candidate = validate_activity(name=name, category=category, duration=duration, date=date)

        with self.locks.hold(owner_id, candidate.date):
            record = self.repository.create_within_budget(owner_id, candidate)

        logger.info(
            "Activity %s added for %s on %s (%d mins, %s)",
            record.id,
            owner_id,
            record.date,
            record.duration_minutes,
            record.category.value,
        )
        return record

    def update(self, owner_id: str, record_id: int, patch: ActivityPatch) -> ActivityRecord:
        """Apply ``patch`` and re-check the budget of the record's target date.

        The patch is merged with the record as stored when the write
        transaction starts, so an update that waited behind a concurrent
        move lands on the record's current date.
        """
        current = self.repository.get(owner_id, record_id)
        if current is None:
            raise NotFound(record_id)
        if patch.is_empty():
            return current

        candidate = patch.apply(current)

        with self.locks.hold(owner_id, current.date, candidate.date):
            updated = self.repository.update_within_budget(owner_id, record_id, patch)

        if updated is None:
            raise NotFound(record_id)
        logger.info("Activity %s updated for %s", record_id, owner_id)
        return updated

    def delete(self, owner_id: str, record_id: int) -> bool:
        """Delete a record. Absent ids raise NotFound on every call."""
        if not self.repository.delete(owner_id, record_id):
            raise NotFound(record_id)
        logger.info("Activity %s deleted for %s", record_id, owner_id)
        return True

    def aggregate_for_date(self, owner_id: str, date: Any) -> Rollup:
        return aggregate(self.list_by_date(owner_id, date))
