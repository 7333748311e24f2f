from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Hashable, Iterable


class KeyedLocks:
    """
    One lock per key (e.g. ("book", 3), ("member", 7)).

    hold() acquires every requested key in sorted order so two callers asking
    for overlapping key sets can never deadlock each other. A key's entry is
    dropped once no caller holds or waits on it.
    """

    def __init__(self):
        self._guard = threading.Lock()
        # key -> [lock, holders + waiters]
        self._locks: dict[Hashable, list] = {}

    def _checkout(self, key: Hashable) -> threading.Lock:
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = [threading.Lock(), 0]
                self._locks[key] = entry
            entry[1] += 1
            return entry[0]

    def _checkin(self, key: Hashable) -> None:
        with self._guard:
            entry = self._locks[key]
            entry[1] -= 1
            if entry[1] == 0:
                del self._locks[key]

    def __len__(self):
        with self._guard:
            return len(self._locks)

    @contextmanager
    def hold(self, keys: Iterable[Hashable]):
        ordered = sorted(set(keys), key=repr)
        checked_out = []
        acquired = []
        try:
            for key in ordered:
                lock = self._checkout(key)
                checked_out.append(key)
                lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()
            for key in checked_out:
                self._checkin(key)
