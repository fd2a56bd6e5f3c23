from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from portfolio_cms.api.main import create_app
from portfolio_cms.data.db import Database
from portfolio_cms.services.storage import LocalStorage


@pytest.fixture
def db(tmp_path: Path) -> Iterator[Database]:
    """A fresh SQLite database with all tables created."""
    database = Database(f"sqlite:///{(tmp_path / 'test.db').as_posix()}")
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def storage(upload_dir: Path) -> LocalStorage:
    return LocalStorage(upload_dir)


@pytest.fixture
def api_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Point the app at a temporary SQLite DB and upload directory."""
    monkeypatch.setenv("DB_URL", f"sqlite:///{(tmp_path / 'api.db').as_posix()}")
    monkeypatch.setenv("UPLOAD_DIR", (tmp_path / "uploads").as_posix())
    monkeypatch.setenv("STORAGE_BACKEND", "local")
    monkeypatch.delenv("UPLOAD_URL_PREFIX", raising=False)


@pytest.fixture
def client(api_env: None) -> Iterator[TestClient]:
    """Test client whose lifespan (table creation, shutdown) runs around each test."""
    with TestClient(create_app()) as test_client:
        yield test_client


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Automatically add api_env fixture to tests in API test files."""
    for item in items:
        test_file_path = Path(str(item.fspath))
        if "api" in test_file_path.stem.lower():
            item.add_marker(pytest.mark.usefixtures("api_env"))
