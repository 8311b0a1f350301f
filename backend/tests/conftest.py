"""Shared test fixtures for backend tests."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from messenger.core.config import settings
from messenger.core.database import init_db
from messenger.services.storage.memory import MemoryCollectionStore


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Point every data and upload directory at a per-test temp dir."""
    monkeypatch.setattr(settings, "data_dir", tmp_path / "data")
    monkeypatch.setattr(settings, "uploads_dir", tmp_path / "uploads")
    monkeypatch.setattr(settings, "wallpaper_dir", tmp_path / "wallpaper")
    return tmp_path


@pytest.fixture
def store():
    return MemoryCollectionStore()


@pytest.fixture
def sqlite_engine():
    # In-memory SQLite with StaticPool so all connections (including threads) share one DB
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    return engine


@pytest.fixture
def client(store):
    """FastAPI TestClient backed by an in-memory collection store."""
    with patch("messenger.core.deps._store", store):
        from messenger.main import app

        with TestClient(app) as c:
            yield c

