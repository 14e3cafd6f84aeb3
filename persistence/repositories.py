from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Protocol

from .interfaces import KeyedBlobStore
from .namespaces import CHARACTERS, INVENTORY, ROOMS, Namespace
from .records import BlobRecord


class AsyncBlobRepository(Protocol):
    async def save(self, key: str, payload: str) -> None: ...
    async def load(self, key: str) -> str | None: ...
    async def load_record(self, key: str) -> BlobRecord | None: ...


class AsyncNamespaceRepository(AsyncBlobRepository):
    """
    Async view of one namespace of a KeyedBlobStore.
    Uses asyncio.to_thread to avoid blocking the event loop on database I/O.
    """

    def __init__(self, store: KeyedBlobStore, namespace: Namespace) -> None:
        self._store = store
        self._namespace = namespace

    @property
    def namespace(self) -> Namespace:
        return self._namespace

    async def save(self, key: str, payload: str) -> None:
        await asyncio.to_thread(self._store.put, self._namespace, key, payload)

    async def load(self, key: str) -> str | None:
        return await asyncio.to_thread(self._store.get, self._namespace, key)

    async def load_record(self, key: str) -> BlobRecord | None:
        return await asyncio.to_thread(self._store.get_record, self._namespace, key)


@dataclass(frozen=True)
class GameStateRepositories:
    characters: AsyncNamespaceRepository
    inventory: AsyncNamespaceRepository
    rooms: AsyncNamespaceRepository

    @classmethod
    def from_store(cls, store: KeyedBlobStore) -> "GameStateRepositories":
        return cls(
            characters=AsyncNamespaceRepository(store, CHARACTERS),
            inventory=AsyncNamespaceRepository(store, INVENTORY),
            rooms=AsyncNamespaceRepository(store, ROOMS),
        )
