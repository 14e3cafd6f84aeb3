from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict, Field

from errors import NotFound, RequestFieldError
from persistence.repositories import GameStateRepositories

router = APIRouter(prefix="/api", tags=["game-state"])
logger = logging.getLogger(__name__)


class UserBlobSaveRequest(BaseModel):
    username: str | None = None
    data: str | None = None


class RoomPlayersSaveRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    room_id: str | None = Field(default=None, alias="roomId")
    players: str | None = None


def get_repositories(request: Request) -> GameStateRepositories:
    return request.app.state.repositories


def _require(key: str | None, payload: str | None, message: str) -> tuple[str, str]:
    if not key or not payload:
        raise RequestFieldError(message)
    return key, payload


# -------------------------------------------------------------------
# CHARACTERS
# -------------------------------------------------------------------

@router.post("/character/save")
async def save_character(body: UserBlobSaveRequest, repos: GameStateRepositories = Depends(get_repositories)):
    username, data = _require(body.username, body.data, "username and data are required")
    await repos.characters.save(username, data)
    logger.info("Saved character: %s", username)
    return {"success": True, "message": "Saved"}


@router.get("/character/load/{username:path}")
async def load_character(username: str, repos: GameStateRepositories = Depends(get_repositories)):
    data = await repos.characters.load(username)
    if data is None:
        raise NotFound("no data")
    logger.info("Loaded character: %s", username)
    return {"data": data}


# -------------------------------------------------------------------
# INVENTORY
# -------------------------------------------------------------------

@router.post("/inventory/save")
async def save_inventory(body: UserBlobSaveRequest, repos: GameStateRepositories = Depends(get_repositories)):
    username, data = _require(body.username, body.data, "username and data are required")
    await repos.inventory.save(username, data)
    logger.info("Saved inventory: %s", username)
    return {"success": True}


@router.get("/inventory/load/{username:path}")
async def load_inventory(username: str, repos: GameStateRepositories = Depends(get_repositories)):
    data = await repos.inventory.load(username)
    if data is None:
        raise NotFound("no data")
    logger.info("Loaded inventory: %s", username)
    return {"data": data}


# -------------------------------------------------------------------
# ROOMS
# -------------------------------------------------------------------

@router.post("/room/players")
async def save_room_players(body: RoomPlayersSaveRequest, repos: GameStateRepositories = Depends(get_repositories)):
    room_id, players = _require(body.room_id, body.players, "roomId and players are required")
    await repos.rooms.save(room_id, players)
    logger.info("Saved room players: %s", room_id)
    return {"success": True}


@router.get("/room/players/{room_id:path}")
async def load_room_players(room_id: str, repos: GameStateRepositories = Depends(get_repositories)):
    # rooms carry a "[]" default, so an unknown room still loads
    players = await repos.rooms.load(room_id)
    logger.info("Loaded room players: %s", room_id)
    return {"players": players}
