from __future__ import annotations

from .blob_store import SqliteBlobStore
from .errors import StorageFailure
from .interfaces import KeyedBlobStore
from .namespaces import CHARACTERS, INVENTORY, ROOMS, Namespace
from .records import BlobRecord
from .repositories import AsyncBlobRepository, AsyncNamespaceRepository, GameStateRepositories

__all__ = [
    "BlobRecord",
    "KeyedBlobStore",
    "SqliteBlobStore",
    "StorageFailure",
    "Namespace",
    "CHARACTERS",
    "INVENTORY",
    "ROOMS",
    "AsyncBlobRepository",
    "AsyncNamespaceRepository",
    "GameStateRepositories",
]
