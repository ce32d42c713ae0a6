import sqlite3

import pytest

from src.ledger import (
    ActivityPatch,
    ActivityRepository,
    BudgetExceeded,
    Category,
    StorageFailure,
    ValidationError,
    validate_activity,
)

TOO_LARGE_ID = 99999999999999999999


def candidate(name="Write report", category="Work", duration=60, date="2024-01-01"):
    return validate_activity(name=name, category=category, duration=duration, date=date)


def test_activity_repository_crud_cycle(tmp_path):
    repo = ActivityRepository(db_path=tmp_path / "ledger.db")

    created = repo.create_within_budget("alice", candidate())
    assert created.id is not None
    assert created.owner_id == "alice"
    assert created.category is Category.WORK
    assert created.created_at == created.updated_at

    items = repo.list_by_date("alice", "2024-01-01")
    assert [item.id for item in items] == [created.id]

    updated = repo.update_within_budget(
        "alice", created.id, ActivityPatch(name="Write summary", duration_minutes=90)
    )
    assert updated is not None
    assert updated.name == "Write summary"
    assert updated.duration_minutes == 90
    assert updated.created_at == created.created_at

    assert repo.delete("alice", created.id) is True
    assert repo.delete("alice", created.id) is False
    assert repo.list_by_date("alice", "2024-01-01") == []


def test_queries_are_scoped_by_owner(tmp_path):
    repo = ActivityRepository(db_path=tmp_path / "ledger.db")
    mine = repo.create_within_budget("alice", candidate())
    repo.create_within_budget("bob", candidate(duration=300))

    assert repo.get("bob", mine.id) is None
    assert repo.update_within_budget("bob", mine.id, ActivityPatch(duration_minutes=1)) is None
    assert repo.delete("bob", mine.id) is False
    assert repo.total_for_date("alice", "2024-01-01") == 60
    assert repo.total_for_date("bob", "2024-01-01") == 300


def test_list_by_date_orders_by_creation(tmp_path):
    repo = ActivityRepository(db_path=tmp_path / "ledger.db")
    first = repo.create_within_budget("alice", candidate(name="Sleep", category="Sleep", duration=420))
    second = repo.create_within_budget("alice", candidate(name="Gym", category="Health", duration=60))
    repo.create_within_budget("alice", candidate(name="Other day", date="2024-01-02"))

    items = repo.list_by_date("alice", "2024-01-01")
    assert [item.id for item in items] == [first.id, second.id]


def test_total_for_date_can_exclude_a_record(tmp_path):
    repo = ActivityRepository(db_path=tmp_path / "ledger.db")
    a = repo.create_within_budget("alice", candidate(duration=100))
    repo.create_within_budget("alice", candidate(duration=200))

    assert repo.total_for_date("alice", "2024-01-01") == 300
    assert repo.total_for_date("alice", "2024-01-01", exclude_id=a.id) == 200
    assert repo.total_for_date("alice", "2030-01-01") == 0


def test_create_within_budget_writes_nothing_on_overflow(tmp_path):
    repo = ActivityRepository(db_path=tmp_path / "ledger.db")
    repo.create_within_budget("alice", candidate(duration=480))

    with pytest.raises(BudgetExceeded) as exc_info:
        repo.create_within_budget("alice", candidate(duration=1000))

    assert exc_info.value.available == 960
    assert repo.total_for_date("alice", "2024-01-01") == 480
    assert len(repo.list_by_date("alice", "2024-01-01")) == 1


def test_update_within_budget_rolls_back_on_rejection(tmp_path):
    repo = ActivityRepository(db_path=tmp_path / "ledger.db")
    record = repo.create_within_budget("alice", candidate(duration=600))
    repo.create_within_budget("alice", candidate(duration=1000, date="2024-01-02"))

    with pytest.raises(BudgetExceeded):
        repo.update_within_budget("alice", record.id, ActivityPatch(date="2024-01-02"))
    with pytest.raises(ValidationError):
        repo.update_within_budget("alice", record.id, ActivityPatch(name=" "))

    assert repo.get("alice", record.id) == record


def test_ids_outside_sqlite_range_are_absent(tmp_path):
    repo = ActivityRepository(db_path=tmp_path / "ledger.db")
    repo.create_within_budget("alice", candidate())

    assert repo.get("alice", TOO_LARGE_ID) is None
    assert repo.update_within_budget("alice", TOO_LARGE_ID, ActivityPatch(name="x")) is None
    assert repo.delete("alice", TOO_LARGE_ID) is False
    assert repo.get("alice", -1) is None


def test_repository_uses_env_path(tmp_path, monkeypatch):
    db_path = tmp_path / "env" / "ledger.db"
    monkeypatch.setenv("DAYLOG_DB_PATH", str(db_path))
    repo = ActivityRepository()
    assert repo.db_path == db_path
    assert db_path.exists()


def test_sqlite_errors_surface_as_storage_failure(tmp_path):
    repo = ActivityRepository(db_path=tmp_path / "ledger.db")
    with sqlite3.connect(repo.db_path) as conn:
        conn.execute("DROP TABLE activities")

    with pytest.raises(StorageFailure):
        repo.list_by_date("alice", "2024-01-01")
    with pytest.raises(StorageFailure):
        repo.create_within_budget("alice", candidate())
