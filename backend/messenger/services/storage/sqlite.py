"""SQLite key/value store: each collection is one JSON row in collectiondocument."""

import copy
import json
import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from messenger.models.collection import CollectionDocument
from messenger.services.storage.base import BaseCollectionStore

logger = logging.getLogger(__name__)


class SqliteCollectionStore(BaseCollectionStore):
    def __init__(self, engine: Engine):
        super().__init__()
        self.engine = engine

    def read(self, collection_id: str, default: Any) -> Any:
        try:
            with Session(self.engine) as session:
                doc = session.get(CollectionDocument, collection_id)
                if doc is None:
                    return copy.deepcopy(default)
                return json.loads(doc.body)
        except (SQLAlchemyError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read collection {collection_id}: {e}")
            return copy.deepcopy(default)

    def write(self, collection_id: str, value: Any) -> None:
        try:
            body = json.dumps(value, ensure_ascii=False)
            with Session(self.engine) as session:
                doc = session.get(CollectionDocument, collection_id)
                if doc is None:
                    doc = CollectionDocument(name=collection_id, body=body)
                else:
                    doc.body = body
                    doc.updated_at = datetime.now(timezone.utc)
                session.add(doc)
                session.commit()
        except (SQLAlchemyError, TypeError, ValueError) as e:
            logger.error(f"Failed to write collection {collection_id}: {e}")
