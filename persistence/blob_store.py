from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from .errors import StorageFailure
from .interfaces import KeyedBlobStore
from .locks import GLOBAL_DB_LOCKS, MEMORY_DB
from .namespaces import ALL_NAMESPACES, Namespace
from .paths import ensure_dir
from .records import BlobRecord, now_millis

logger = logging.getLogger(__name__)


class SqliteBlobStore(KeyedBlobStore):
    """
    Stores every namespace as a table in a single SQLite file.

    - One connection for the lifetime of the store, shared across threads.
    - Statements are serialized through the per-file lock.
    - Writes are single-statement upserts, so a reader never sees a partial overwrite.
    - Engine errors surface as StorageFailure; absence surfaces as None.
    """

    def __init__(self, db_path: str | Path, namespaces: tuple[Namespace, ...] = ALL_NAMESPACES):
        self._db_path = str(db_path)
        self._namespaces = namespaces
        if self._db_path != MEMORY_DB:
            ensure_dir(Path(self._db_path).parent)
        self._lock = GLOBAL_DB_LOCKS.lock_for(self._db_path)
        self._conn: sqlite3.Connection | None = sqlite3.connect(self._db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self.ensure_schema()

    @property
    def db_path(self) -> str:
        return self._db_path

    @property
    def namespaces(self) -> tuple[Namespace, ...]:
        return self._namespaces

    def ensure_schema(self) -> None:
        with self._lock:
            conn = self._require_conn("ensure_schema", "*", "*")
            try:
                conn.executescript("\n".join(ns.create_table_sql() for ns in self._namespaces))
                conn.commit()
            except sqlite3.Error as e:
                raise StorageFailure("ensure_schema", "*", "*", e) from e

    def put(self, namespace: Namespace, key: str, payload: str) -> None:
        if not key or not payload:
            raise ValueError("key and payload must be non-empty")
        with self._lock:
            conn = self._require_conn("put", namespace.name, key)
            try:
                with conn:
                    conn.execute(namespace.upsert_sql(), (key, payload, now_millis()))
            except sqlite3.Error as e:
                raise StorageFailure("put", namespace.name, key, e) from e

    def get(self, namespace: Namespace, key: str) -> str | None:
        record = self.get_record(namespace, key)
        if record is None:
            return namespace.default_payload
        return record.payload

    def get_record(self, namespace: Namespace, key: str) -> BlobRecord | None:
        with self._lock:
            conn = self._require_conn("get", namespace.name, key)
            try:
                row = conn.execute(namespace.select_sql(), (key,)).fetchone()
            except sqlite3.Error as e:
                raise StorageFailure("get", namespace.name, key, e) from e
        if row is None:
            return None
        return BlobRecord(namespace=namespace.name, key=key, payload=row["payload"], updated_at=row["updated_at"])

    def close(self) -> None:
        with self._lock:
            if self._conn is None:
                return
            self._conn.close()
            self._conn = None
        logger.info("Closed database %s", self._db_path)

    def __enter__(self) -> "SqliteBlobStore":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _require_conn(self, operation: str, namespace: str, key: str) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageFailure(operation, namespace, key, sqlite3.ProgrammingError("database is closed"))
        return self._conn
