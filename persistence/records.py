from __future__ import annotations

import time

from pydantic import BaseModel


def now_millis() -> int:
    return time.time_ns() // 1_000_000


class BlobRecord(BaseModel):
    """
    One stored row. Mirrors the table layout shared by every namespace:
      (<key column> TEXT PRIMARY KEY, <payload column> TEXT NOT NULL, updated_at INTEGER NOT NULL)
    """

    namespace: str
    key: str
    payload: str
    updated_at: int
