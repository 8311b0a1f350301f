"""Tests for the collection store backends and factory."""

import json
import logging

import pytest

from messenger.core.config import settings
from messenger.services.storage import get_collection_store
from messenger.services.storage.json_file import JsonFileCollectionStore
from messenger.services.storage.memory import MemoryCollectionStore
from messenger.services.storage.sqlite import SqliteCollectionStore


@pytest.fixture(params=["json", "memory", "sqlite"])
def any_store(request, tmp_path, sqlite_engine):
    if request.param == "json":
        return JsonFileCollectionStore(tmp_path / "data")
    if request.param == "memory":
        return MemoryCollectionStore()
    return SqliteCollectionStore(sqlite_engine)


def test_read_missing_returns_default_without_persisting(any_store):
    default = []
    value = any_store.read("messages", default)
    assert value == []
    value.append("x")
    assert default == []
    assert any_store.read("messages", {"empty": True}) == {"empty": True}


def test_write_replaces_whole_collection(any_store):
    any_store.write("chats", [{"id": "1"}, {"id": "2"}])
    any_store.write("chats", [{"id": "3"}])
    assert any_store.read("chats", []) == [{"id": "3"}]


def test_collections_are_independent(any_store):
    any_store.write("messages", [1])
    any_store.write("portfolio", {"alice": {"description": "", "items": []}})
    assert any_store.read("messages", []) == [1]
    assert any_store.read("portfolio", {}) == {"alice": {"description": "", "items": []}}


def test_read_result_is_detached_from_store(any_store):
    any_store.write("users", [{"username": "alice"}])
    users = any_store.read("users", [])
    users[0]["username"] = "mallory"
    assert any_store.read("users", []) == [{"username": "alice"}]


def test_json_store_creates_directory_and_pretty_prints(tmp_path):
    store = JsonFileCollectionStore(tmp_path / "nested" / "data")
    store.write("messages", [{"id": "1"}])
    path = tmp_path / "nested" / "data" / "messages.json"
    assert json.loads(path.read_text()) == [{"id": "1"}]
    assert path.read_text().startswith("[\n  {")


def test_json_store_malformed_file_falls_back_to_default(tmp_path, caplog):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "messages.json").write_text("{not json")
    store = JsonFileCollectionStore(data_dir)
    with caplog.at_level(logging.ERROR):
        assert store.read("messages", []) == []
    assert "Failed to read" in caplog.text


def test_json_store_write_failure_is_logged_not_raised(tmp_path, caplog):
    blocker = tmp_path / "data"
    blocker.write_text("a file where the directory should be")
    store = JsonFileCollectionStore(blocker)
    with caplog.at_level(logging.ERROR):
        store.write("messages", [{"id": "1"}])
    assert "Failed to write" in caplog.text
    assert store.read("messages", []) == []


def test_sqlite_store_malformed_body_falls_back(sqlite_engine, caplog):
    from sqlmodel import Session

    from messenger.models.collection import CollectionDocument

    with Session(sqlite_engine) as session:
        session.add(CollectionDocument(name="chats", body="not json"))
        session.commit()

    store = SqliteCollectionStore(sqlite_engine)
    with caplog.at_level(logging.ERROR):
        assert store.read("chats", []) == []
    assert "Failed to read" in caplog.text


def test_locked_is_reentrant():
    store = MemoryCollectionStore()
    with store.locked("messages"):
        with store.locked("messages"):
            store.write("messages", [1])
    assert store.read("messages", []) == [1]


def test_factory_selects_backend(monkeypatch):
    monkeypatch.setattr(settings, "storage_backend", "memory")
    assert isinstance(get_collection_store(), MemoryCollectionStore)

    monkeypatch.setattr(settings, "storage_backend", "json")
    store = get_collection_store()
    assert isinstance(store, JsonFileCollectionStore)
    assert store.data_dir == settings.data_dir


def test_factory_builds_sqlite_store(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "storage_backend", "sqlite")
    monkeypatch.setattr(settings, "db_path", tmp_path / "messenger.db")
    store = get_collection_store()
    assert isinstance(store, SqliteCollectionStore)
    store.write("chats", [{"id": "1", "participants": ["a", "b"]}])
    assert store.read("chats", []) == [{"id": "1", "participants": ["a", "b"]}]


def test_factory_rejects_unknown_backend(monkeypatch):
    monkeypatch.setattr(settings, "storage_backend", "redis")
    with pytest.raises(ValueError, match="Unknown storage backend"):
        get_collection_store()


def test_read_failure_log_names_the_file(tmp_path, caplog):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "chats.json").write_text("[")
    with caplog.at_level(logging.ERROR):
        JsonFileCollectionStore(data_dir).read("chats", [])
    assert f"Failed to read {data_dir / 'chats.json'}: " in caplog.text
