"""Per-user portfolios: a description plus uploaded file items."""

import logging
from typing import Optional

from messenger.services.storage.base import BaseCollectionStore
from messenger.services.uploads import StoredFile

logger = logging.getLogger(__name__)

PORTFOLIO = "portfolio"


def _empty() -> dict:
    return {"description": "", "items": []}


class PortfolioService:
    def __init__(self, store: BaseCollectionStore):
        self.store = store

    def get(self, username: str) -> dict:
        return self.store.read(PORTFOLIO, {}).get(username) or _empty()

    def files(self, username: str) -> Optional[list[dict]]:
        """Items of the user's portfolio, or None if the user has none."""
        portfolio = self.store.read(PORTFOLIO, {}).get(username)
        if portfolio is None:
            return None
        return portfolio.get("items") or []

    def update(
        self,
        username: str,
        description: Optional[str] = None,
        files: Optional[list[StoredFile]] = None,
    ) -> dict:
        with self.store.locked(PORTFOLIO):
            portfolios = self.store.read(PORTFOLIO, {})
            portfolio = portfolios.setdefault(username, _empty())
            if description is not None:
                portfolio["description"] = description
            for f in files or []:
                portfolio.setdefault("items", []).append({
                    "type": "file",
                    "filename": f.filename,
                    "originalname": f.original_name,
                    "mimetype": f.content_type,
                    "url": f"/uploads/{f.filename}",
                })
            self.store.write(PORTFOLIO, portfolios)
        logger.info(f"Portfolio updated for user: {username}")
        return portfolio
