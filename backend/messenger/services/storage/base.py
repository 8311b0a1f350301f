"""Abstract collection store interface. All storage backends implement this."""

import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Iterator


class BaseCollectionStore(ABC):
    """Named collections, each persisted as one whole JSON document.

    Reads and writes never raise: unreadable documents fall back to the
    caller's default and failed writes are logged. Read-modify-write sequences
    must run inside ``locked(collection_id)``.
    """

    def __init__(self) -> None:
        self._locks: dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    @abstractmethod
    def read(self, collection_id: str, default: Any) -> Any:
        """Return the stored collection, or a copy of default if none is stored."""
        ...

    @abstractmethod
    def write(self, collection_id: str, value: Any) -> None:
        """Replace the stored collection with value."""
        ...

    @contextmanager
    def locked(self, collection_id: str) -> Iterator[None]:
        with self._locks_guard:
            lock = self._locks.setdefault(collection_id, threading.RLock())
        with lock:
            yield
