"""Per-subject serialization of ledger-affecting actions.

Locks are striped: each key hashes onto one of a fixed number of re-entrant
locks. ``hold`` acquires all stripes for an action in ascending stripe order,
so two actions can never wait on each other in a cycle.
"""
from __future__ import annotations

import threading
from collections.abc import Hashable, Iterator
from contextlib import contextmanager

DEFAULT_STRIPES = 256


class SubjectLocks:
    """Process-wide striped locks keyed by subject."""

    def __init__(self, stripes: int = DEFAULT_STRIPES) -> None:
        if stripes < 1:
            raise ValueError("stripes must be positive")
        self._locks = [threading.RLock() for _ in range(stripes)]

    def stripe(self, key: Hashable) -> int:
        return hash(key) % len(self._locks)

    @contextmanager
    def hold(self, *keys: Hashable) -> Iterator[None]:
        """Hold the locks for every key for the duration of the block."""
        indexes = sorted({self.stripe(key) for key in keys})
        acquired: list[threading.RLock] = []
        try:
            for index in indexes:
                lock = self._locks[index]
                lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()


_subject_locks = SubjectLocks()


def get_subject_locks() -> SubjectLocks:
    """Return the shared lock registry."""
    return _subject_locks
