"""Direct message, conversation and chat summary models."""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Attachment(BaseModel):
    url: str
    content_type: str


class Message(BaseModel):
    """A direct message. Persisted with the keys from/to/fileUrl/fileType."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    sender: str = Field(alias="from")
    recipient: str = Field(alias="to")
    text: Optional[str] = None
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    read: bool = False
    attachment: Optional[Attachment] = None

    @model_validator(mode="before")
    @classmethod
    def _lift_attachment(cls, data: Any) -> Any:
        if isinstance(data, dict) and "fileUrl" in data:
            data = dict(data)
            data["attachment"] = {
                "url": data.pop("fileUrl"),
                "content_type": data.pop("fileType", None) or "",
            }
        return data

    def to_record(self) -> dict:
        record: dict[str, Any] = {"id": self.id, "from": self.sender, "to": self.recipient}
        if self.text is not None:
            record["text"] = self.text
        record["timestamp"] = self.timestamp
        record["read"] = self.read
        if self.attachment:
            record["fileUrl"] = self.attachment.url
            record["fileType"] = self.attachment.content_type
        return record


class Conversation(BaseModel):
    id: str
    participants: list[str]

    def counterpart(self, username: str) -> str:
        """The other participant; a self-conversation returns the user."""
        for p in self.participants:
            if p != username:
                return p
        return username


class ChatSummary(BaseModel):
    id: str
    name: str
    avatar: str
    lastMessage: str = ""
    lastTime: Optional[str] = None
    unreadCount: int = 0
