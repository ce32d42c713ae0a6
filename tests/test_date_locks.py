import threading
import time

from src.ledger import DateLockRegistry


def test_hold_releases_and_forgets_locks():
    registry = DateLockRegistry()
    with registry.hold("alice", "2024-01-02", "2024-01-01", "2024-01-01"):
        assert sorted(registry.active_keys()) == [
            ("alice", "2024-01-01"),
            ("alice", "2024-01-02"),
        ]
    assert registry.active_keys() == []


def test_hold_releases_on_error():
    registry = DateLockRegistry()
    try:
        with registry.hold("alice", "2024-01-01"):
            raise RuntimeError("boom")
    except RuntimeError:
        pass
    assert registry.active_keys() == []


def test_same_key_is_serialized():
    registry = DateLockRegistry()
    inside = []
    overlaps = []

    def worker():
        with registry.hold("alice", "2024-01-01"):
            if inside:
                overlaps.append(True)
            inside.append(True)
            time.sleep(0.01)
            inside.pop()

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert overlaps == []


def test_different_keys_do_not_contend():
    registry = DateLockRegistry()
    entered = threading.Event()

    def other_owner():
        with registry.hold("bob", "2024-01-01"):
            entered.set()

    with registry.hold("alice", "2024-01-01"):
        thread = threading.Thread(target=other_owner)
        thread.start()
        assert entered.wait(timeout=2)
        thread.join()
