from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Namespace:
    """One independent keyed collection, backed by its own table."""

    name: str
    table: str
    key_column: str
    payload_column: str
    # Returned by lookups of an absent key instead of "not found".
    default_payload: str | None = None

    def create_table_sql(self) -> str:
        return (
            f"CREATE TABLE IF NOT EXISTS {self.table} (\n"
            f"    {self.key_column} TEXT PRIMARY KEY,\n"
            f"    {self.payload_column} TEXT NOT NULL,\n"
            f"    updated_at INTEGER NOT NULL\n"
            f");"
        )

    def upsert_sql(self) -> str:
        return (
            f"INSERT INTO {self.table} ({self.key_column}, {self.payload_column}, updated_at)\n"
            f"VALUES (?, ?, ?)\n"
            f"ON CONFLICT({self.key_column}) DO UPDATE SET\n"
            f"    {self.payload_column} = excluded.{self.payload_column},\n"
            f"    updated_at = MAX(excluded.updated_at, {self.table}.updated_at)"
        )

    def select_sql(self) -> str:
        return (
            f"SELECT {self.payload_column} AS payload, updated_at FROM {self.table} "
            f"WHERE {self.key_column} = ?"
        )


CHARACTERS = Namespace(name="characters", table="characters", key_column="username", payload_column="data")
INVENTORY = Namespace(name="inventory", table="inventory", key_column="username", payload_column="data")
ROOMS = Namespace(
    name="rooms",
    table="rooms",
    key_column="room_id",
    payload_column="players",
    default_payload="[]",
)

ALL_NAMESPACES: tuple[Namespace, ...] = (CHARACTERS, INVENTORY, ROOMS)

