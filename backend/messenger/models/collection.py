"""Whole-document collection rows for the SQLite store backend."""

from datetime import datetime, timezone

from sqlmodel import Field, SQLModel


class CollectionDocument(SQLModel, table=True):
    name: str = Field(primary_key=True)
    body: str  # JSON-encoded collection
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
