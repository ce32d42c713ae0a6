"""Per (owner, date) serialization scopes for read-check-write sequences."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Tuple

LockKey = Tuple[str, str]


class DateLockRegistry:
    """Thread-safe registry of one lock per ``(owner_id, date)``.

    Locks are reference counted and discarded once no caller holds or waits
    on them, so the registry does not grow with the number of dates touched.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._locks: Dict[LockKey, threading.Lock] = {}
        self._refs: Dict[LockKey, int] = {}

    def _acquire_ref(self, key: LockKey) -> threading.Lock:
        with self._lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
                self._refs[key] = 0
            self._refs[key] += 1
            return lock

    def _release_ref(self, key: LockKey) -> None:
        with self._lock:
            self._refs[key] -= 1
            if self._refs[key] == 0:
                del self._refs[key]
                del self._locks[key]

    @contextmanager
    def hold(self, owner_id: str, *dates: str) -> Iterator[None]:
        """Hold the locks for ``owner_id`` on every given date.

        Dates are de-duplicated and acquired in sorted order so two updates
        moving records between the same pair of dates cannot deadlock.
        """
        keys = [(owner_id, d) for d in sorted(set(dates))]
        acquired: List[Tuple[LockKey, threading.Lock]] = []
        try:
            for key in keys:
                lock = self._acquire_ref(key)
                try:
                    lock.acquire()
                except BaseException:
                    self._release_ref(key)
                    raise
                acquired.append((key, lock))
            yield
        finally:
            for key, lock in reversed(acquired):
                lock.release()
                self._release_ref(key)

    def active_keys(self) -> List[LockKey]:
        with self._lock:
            return list(self._locks)
