"""Collection store factory."""

from messenger.core.config import settings
from messenger.services.storage.base import BaseCollectionStore


def get_collection_store() -> BaseCollectionStore:
    """Factory function that returns the configured storage backend."""
    if settings.storage_backend == "json":
        from messenger.services.storage.json_file import JsonFileCollectionStore
        return JsonFileCollectionStore(settings.data_dir)
    elif settings.storage_backend == "memory":
        from messenger.services.storage.memory import MemoryCollectionStore
        return MemoryCollectionStore()
    elif settings.storage_backend == "sqlite":
        from messenger.core.database import create_db_engine, init_db
        from messenger.services.storage.sqlite import SqliteCollectionStore
        engine = create_db_engine()
        init_db(engine)
        return SqliteCollectionStore(engine)
    else:
        raise ValueError(f"Unknown storage backend: {settings.storage_backend}")
