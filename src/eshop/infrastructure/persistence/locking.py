"""Row locks for the JSON store.

Gives units of work the equivalent of ``SELECT ... FOR UPDATE``: the
first unit of work to lock a row holds it until it commits or rolls
back, and everyone else asking for the same row waits.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Hashable


@dataclass
class _RowLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0  # the holder plus every waiter


class RowLocks:
    """One lock per row key, shared by every unit of work on a store.

    An entry lives only while some unit of work holds or waits for the
    row, so keys taken from client input do not pile up.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[Hashable, _RowLock] = {}

    def acquire(self, key: Hashable) -> None:
        with self._guard:
            row = self._locks.get(key)
            if row is None:
                row = self._locks[key] = _RowLock()
            row.users += 1
        row.lock.acquire()

    def release(self, key: Hashable) -> None:
        with self._guard:
            row = self._locks[key]
            row.users -= 1
            if row.users == 0:
                del self._locks[key]
        row.lock.release()


class HeldLocks:
    """The row locks taken by a single unit of work."""

    def __init__(self, row_locks: RowLocks) -> None:
        self._row_locks = row_locks
        self._held: list[Hashable] = []

    def acquire(self, key: Hashable) -> None:
        """Block until the row is ours. Re-acquiring a held row is a no-op."""
        if key in self._held:
            return
        self._row_locks.acquire(key)
        self._held.append(key)

    def release_all(self) -> None:
        for key in reversed(self._held):
            self._row_locks.release(key)
        self._held.clear()
