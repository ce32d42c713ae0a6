from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional

from .budget import enforce_budget
from .errors import StorageFailure
from .models import ActivityCandidate, ActivityPatch, ActivityRecord, Category

logger = logging.getLogger(__name__)

MAX_SQLITE_INTEGER = 2**63 - 1

# Seconds a writer waits for another process's write transaction to finish.
BUSY_TIMEOUT = 30.0


def _is_storable_id(record_id: int) -> bool:
    """Ids outside SQLite's INTEGER range can never have been assigned."""
    return 0 < record_id <= MAX_SQLITE_INTEGER


class ActivityRepository:
    """SQLite-backed activity store. Every query is scoped by ``owner_id``."""

    def __init__(self, db_path: Optional[Path] = None):
        root = Path(__file__).resolve().parents[2]
        default_path = root / "data" / "daylog.db"
        env_path = os.getenv("DAYLOG_DB_PATH")
        if db_path:
            self.db_path = Path(db_path)
        elif env_path:
            self.db_path = Path(env_path)
        else:
            self.db_path = default_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._initialize()

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as exc:
            raise StorageFailure(f"Cannot open activity store: {exc}") from exc
        conn.row_factory = sqlite3.Row
        try:
            with conn:
                yield conn
        except sqlite3.Error as exc:
            logger.error("Activity store error: %s", exc)
            raise StorageFailure(f"Activity store error: {exc}") from exc
        finally:
            conn.close()

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        """Single connection holding the database write lock from first read to commit.

        ``BEGIN IMMEDIATE`` serializes read-check-write sequences across
        every process sharing the database file.
        """
        try:
            conn = sqlite3.connect(self.db_path, timeout=BUSY_TIMEOUT, isolation_level=None)
        except sqlite3.Error as exc:
            raise StorageFailure(f"Cannot open activity store: {exc}") from exc
        conn.row_factory = sqlite3.Row
        try:
            conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")
        except sqlite3.Error as exc:
            logger.error("Activity store error: %s", exc)
            raise StorageFailure(f"Activity store error: {exc}") from exc
        finally:
            conn.close()

    def _initialize(self) -> None:
        with self._connection() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS activities (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    owner_id TEXT NOT NULL,
                    name TEXT NOT NULL,
                    category TEXT NOT NULL CHECK (category IN ('Work','Study','Health','Sleep','Leisure','Others')),
                    duration INTEGER NOT NULL CHECK (duration > 0),
                    date TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_activities_owner_date ON activities(owner_id, date)"
            )

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> ActivityRecord:
        return ActivityRecord(
            id=row["id"],
            owner_id=row["owner_id"],
            name=row["name"],
            category=Category(row["category"]),
            duration_minutes=row["duration"],
            date=row["date"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def list_by_date(self, owner_id: str, date: str) -> list[ActivityRecord]:
        with self._connection() as conn:
            rows = conn.execute(
                """
                SELECT * FROM activities
                WHERE owner_id = ? AND date = ?
                ORDER BY created_at ASC, id ASC
                """,
                (owner_id, date),
            ).fetchall()
        return [self._row_to_record(row) for row in rows]

    @staticmethod
    def _sum_durations(
        conn: sqlite3.Connection, owner_id: str, date: str, exclude_id: Optional[int] = None
    ) -> int:
        query = "SELECT COALESCE(SUM(duration), 0) FROM activities WHERE owner_id = ? AND date = ?"
        params: list[object] = [owner_id, date]
        if exclude_id is not None:
            query += " AND id != ?"
            params.append(exclude_id)
        (total,) = conn.execute(query, params).fetchone()
        return int(total)

    def total_for_date(
        self, owner_id: str, date: str, exclude_id: Optional[int] = None
    ) -> int:
        """Sum of durations for ``(owner_id, date)``, optionally leaving one record out."""
        with self._connection() as conn:
            return self._sum_durations(conn, owner_id, date, exclude_id)

    def get(self, owner_id: str, record_id: int) -> Optional[ActivityRecord]:
        if not _is_storable_id(record_id):
            return None
        with self._connection() as conn:
            row = conn.execute(
                "SELECT * FROM activities WHERE id = ? AND owner_id = ?",
                (record_id, owner_id),
            ).fetchone()
        return self._row_to_record(row) if row else None

    def create_within_budget(self, owner_id: str, candidate: ActivityCandidate) -> ActivityRecord:
        """Insert ``candidate`` if the day's total still fits the budget.

        Raises:
            BudgetExceeded: nothing is written
        """
        now = self._now()
        with self._transaction() as conn:
            existing = self._sum_durations(conn, owner_id, candidate.date)
            enforce_budget(existing, candidate.duration_minutes)
            cursor = conn.execute(
                """
                INSERT INTO activities (owner_id, name, category, duration, date, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    owner_id,
                    candidate.name,
                    candidate.category.value,
                    candidate.duration_minutes,
                    candidate.date,
                    now,
                    now,
                ),
            )
            row = conn.execute(
                "SELECT * FROM activities WHERE id = ?", (cursor.lastrowid,)
            ).fetchone()
        return self._row_to_record(row)

    def update_within_budget(
        self, owner_id: str, record_id: int, patch: ActivityPatch
    ) -> Optional[ActivityRecord]:
        """Apply ``patch`` to the stored record and write it if the target day still fits.

        The patch is applied to the row as read inside the transaction, so a
        concurrent move to another date is honoured. Returns None if the
        record is not this owner's.

        Raises:
            ValidationError: the merged record is invalid
            BudgetExceeded: nothing is written
        """
        if not _is_storable_id(record_id):
            return None
        with self._transaction() as conn:
            row = conn.execute(
                "SELECT * FROM activities WHERE id = ? AND owner_id = ?",
                (record_id, owner_id),
            ).fetchone()
            if row is None:
                return None
            candidate = patch.apply(self._row_to_record(row))

            existing = self._sum_durations(conn, owner_id, candidate.date, exclude_id=record_id)
            enforce_budget(existing, candidate.duration_minutes)
            conn.execute(
                """
                UPDATE activities
                SET name = ?, category = ?, duration = ?, date = ?, updated_at = ?
                WHERE id = ? AND owner_id = ?
                """,
                (
                    candidate.name,
                    candidate.category.value,
                    candidate.duration_minutes,
                    candidate.date,
                    self._now(),
                    record_id,
                    owner_id,
                ),
            )
            row = conn.execute(
                "SELECT * FROM activities WHERE id = ?", (record_id,)
            ).fetchone()
        return self._row_to_record(row)

    def delete(self, owner_id: str, record_id: int) -> bool:
        if not _is_storable_id(record_id):
            return False
        with self._connection() as conn:
            cursor = conn.execute(
                "DELETE FROM activities WHERE id = ? AND owner_id = ?",
                (record_id, owner_id),
            )
            return cursor.rowcount > 0
