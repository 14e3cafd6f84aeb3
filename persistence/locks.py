from __future__ import annotations

import threading
from pathlib import Path

MEMORY_DB = ":memory:"


class DatabaseLockRegistry:
    """
    Provides a stable lock per database file so every connection to the same file
    serializes its statements, while unrelated files never contend.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def lock_for(self, db_path: str | Path) -> threading.Lock:
        if str(db_path) == MEMORY_DB:
            # every in-memory connection is a private database
            return threading.Lock()
        key = str(Path(db_path).resolve())
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock


GLOBAL_DB_LOCKS = DatabaseLockRegistry()
