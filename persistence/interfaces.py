from __future__ import annotations

from typing import Protocol

from .namespaces import Namespace
from .records import BlobRecord


class KeyedBlobStore(Protocol):
    """
    Durable upsert and point lookup of opaque string payloads, partitioned into namespaces.
    """

    def put(self, namespace: Namespace, key: str, payload: str) -> None:
        """Insert or overwrite the payload for key, refreshing its timestamp."""
        ...

    def get(self, namespace: Namespace, key: str) -> str | None:
        """Return the stored payload, the namespace default, or None when absent."""
        ...

    def get_record(self, namespace: Namespace, key: str) -> BlobRecord | None:
        ...

    def close(self) -> None:
        ...
