from __future__ import annotations

import dataclasses
import logging

import pytest
from fastapi.testclient import TestClient

from persistence.errors import StorageFailure


def test_liveness_routes(client):
    r = client.get("/")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert body["message"]
    assert body["timestamp"].endswith("Z")

    for path in ("/ping", "/api/ping"):
        r = client.get(path)
        assert r.status_code == 200
        assert isinstance(r.json()["timestamp"], int)


def test_cors_allows_any_origin(client):
    r = client.get("/ping", headers={"Origin": "https://game.example.com"})
    assert r.headers["access-control-allow-origin"] == "*"


def test_oversized_body_is_rejected(sandbox_project):
    import app as app_module
    from settings import get_settings

    settings = dataclasses.replace(get_settings(), max_body_bytes=64)
    with TestClient(app_module.create_app(settings)) as client:
        r = client.post("/api/character/save", json={"username": "alice", "data": "x" * 200})
        assert r.status_code == 413
        assert client.get("/api/character/load/alice").status_code == 404


def test_shutdown_closes_store(sandbox_project):
    import app as app_module
    from persistence.blob_store import SqliteBlobStore

    store = SqliteBlobStore(sandbox_project / "custom.db")
    with TestClient(app_module.create_app(store=store)) as client:
        assert client.get("/api/room/players/r1").json() == {"players": "[]"}

    assert (sandbox_project / "custom.db").exists()
    with pytest.raises(StorageFailure):
        store.get_record(store.namespaces[0], "anyone")


def test_request_log_middleware(sandbox_project, monkeypatch, caplog):
    import app as app_module

    monkeypatch.setenv("DEBUG_LOG_REQUESTS", "true")
    with caplog.at_level(logging.INFO, logger="app"):
        with TestClient(app_module.create_app()) as client:
            client.get("/ping")
    assert any("GET /ping -> 200" in rec.getMessage() for rec in caplog.records)


def test_oversized_chunked_body_is_rejected(sandbox_project):
    import app as app_module
    from settings import get_settings

    settings = dataclasses.replace(get_settings(), max_body_bytes=64)

    def _chunks():
        yield b'{"username": "alice", "data": "'
        for _ in range(10):
            yield b"x" * 50
        yield b'"}'

    with TestClient(app_module.create_app(settings)) as client:
        r = client.post(
            "/api/character/save",
            content=_chunks(),
            headers={"content-type": "application/json"},
        )
        assert r.status_code == 413
        assert client.get("/api/character/load/alice").status_code == 404


def test_small_chunked_body_reaches_handler(sandbox_project):
    import app as app_module
    from settings import get_settings

    settings = dataclasses.replace(get_settings(), max_body_bytes=64)

    def _chunks():
        yield b'{"username": "bob", '
        yield b'"data": "ok"}'

    with TestClient(app_module.create_app(settings)) as client:
        r = client.post(
            "/api/character/save",
            content=_chunks(),
            headers={"content-type": "application/json"},
        )
        assert r.status_code == 200
        assert client.get("/api/character/load/bob").json() == {"data": "ok"}


def test_root_timestamp_has_millisecond_precision(client):
    from datetime import datetime

    stamp = client.get("/").json()["timestamp"]
    # e.g. 2026-10-19T12:00:00.123Z
    assert len(stamp.split(".")[1]) == len("123Z")
    datetime.fromisoformat(stamp.replace("Z", "+00:00"))
