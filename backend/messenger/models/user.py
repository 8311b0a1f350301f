from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


class User(BaseModel):
    username: str
    password: str  # stored as given, compared in full on login
    profile_photo: Optional[str] = None
    createdAt: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    lastLogin: Optional[str] = None
    lastLogout: Optional[str] = None
    role: str = "member"  # admin | member
    whatsapp: Optional[str] = None
    instagram: Optional[str] = None
