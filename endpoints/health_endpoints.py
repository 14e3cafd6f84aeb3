from __future__ import annotations

import time
from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/")
async def root():
    return {
        "status": "ok",
        "message": "RPG server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
    }


@router.get("/ping")
async def ping():
    return {"message": "Server is healthy", "timestamp": time.time_ns() // 1_000_000}


@router.get("/api/ping")
async def ping_alias():
    return await ping()
