"""In-memory store for deployments without a persistent file system."""

import copy
import logging
from typing import Any

from messenger.services.storage.base import BaseCollectionStore

logger = logging.getLogger(__name__)


class MemoryCollectionStore(BaseCollectionStore):
    def __init__(self) -> None:
        super().__init__()
        self._documents: dict[str, Any] = {}

    def read(self, collection_id: str, default: Any) -> Any:
        # Copies keep callers from mutating stored state outside write()
        if collection_id not in self._documents:
            return copy.deepcopy(default)
        return copy.deepcopy(self._documents[collection_id])

    def write(self, collection_id: str, value: Any) -> None:
        self._documents[collection_id] = copy.deepcopy(value)
        logger.debug(f"Collection {collection_id} updated in memory")
