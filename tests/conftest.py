from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for imports like `import persistence...` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def sandbox_project(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Redirect the project root to a temp directory so tests never touch a real ./rpg.db.
    """
    import persistence.paths as paths

    def _project_root() -> Path:
        return tmp_path

    monkeypatch.setattr(paths, "project_root", _project_root)
    monkeypatch.delenv("RPG_DB_PATH", raising=False)
    monkeypatch.delenv("MAX_BODY_BYTES", raising=False)
    monkeypatch.delenv("DEBUG_LOG_REQUESTS", raising=False)
    return tmp_path


@pytest.fixture
def store(sandbox_project: Path):
    from persistence.blob_store import SqliteBlobStore

    with SqliteBlobStore(sandbox_project / "rpg.db") as s:
        yield s


@pytest.fixture
def client(sandbox_project: Path):
    from fastapi.testclient import TestClient

    import app as app_module

    with TestClient(app_module.create_app()) as c:
        yield c
