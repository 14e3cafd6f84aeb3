from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from persistence.paths import default_db_path

DEFAULT_PORT = 3000
DEFAULT_MAX_BODY_BYTES = 10 * 1024 * 1024


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


@dataclass(frozen=True)
class Settings:
    # Listening address
    host: str
    port: int

    # Persistence
    db_path: Path

    # Transport
    max_body_bytes: int

    # Logging
    log_level: str
    debug_log_requests: bool


def get_settings() -> Settings:
    host = os.getenv("HOST", "0.0.0.0")
    port = _env_int("PORT", DEFAULT_PORT)

    raw_db_path = os.getenv("RPG_DB_PATH", "").strip()
    db_path = Path(raw_db_path) if raw_db_path else default_db_path()

    max_body_bytes = _env_int("MAX_BODY_BYTES", DEFAULT_MAX_BODY_BYTES)

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    debug_log_requests = _env_bool("DEBUG_LOG_REQUESTS", False)

    return Settings(
        host=host,
        port=port,
        db_path=db_path,
        max_body_bytes=max_body_bytes,
        log_level=log_level,
        debug_log_requests=debug_log_requests,
    )
