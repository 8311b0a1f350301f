"""File-backed store: one pretty-printed <collection>.json per collection."""

import copy
import json
import logging
from pathlib import Path
from typing import Any

from messenger.services.storage.base import BaseCollectionStore

logger = logging.getLogger(__name__)


class JsonFileCollectionStore(BaseCollectionStore):
    def __init__(self, data_dir: Path):
        super().__init__()
        self.data_dir = data_dir

    def _path(self, collection_id: str) -> Path:
        return self.data_dir / f"{collection_id}.json"

    def read(self, collection_id: str, default: Any) -> Any:
        path = self._path(collection_id)
        if not path.exists():
            return copy.deepcopy(default)
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {path}: {e}")
            return copy.deepcopy(default)

    def write(self, collection_id: str, value: Any) -> None:
        path = self._path(collection_id)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(value, indent=2, ensure_ascii=False), encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to write {path}: {e}")
