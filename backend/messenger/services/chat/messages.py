"""Message store: append, pair lookup and read-state updates over the messages collection."""

import logging
from typing import Optional

from messenger.core.ids import next_id
from messenger.models.chat import Attachment, Message
from messenger.services.storage.base import BaseCollectionStore

logger = logging.getLogger(__name__)

MESSAGES = "messages"


class EmptyMessageError(ValueError):
    pass


class MessageStore:
    def __init__(self, store: BaseCollectionStore):
        self.store = store

    def add_message(
        self,
        sender: str,
        recipient: str,
        text: Optional[str] = None,
        attachment: Optional[Attachment] = None,
    ) -> Message:
        if not text and attachment is None:
            raise EmptyMessageError("A message needs text or an attachment")

        message = Message(
            id=next_id(),
            sender=sender,
            recipient=recipient,
            text=text,
            attachment=attachment,
        )
        with self.store.locked(MESSAGES):
            records = self.store.read(MESSAGES, [])
            records.append(message.to_record())
            self.store.write(MESSAGES, records)
        logger.debug(f"Stored message {message.id} from {sender} to {recipient}")
        return message

    def get_messages_between(self, user_a: str, user_b: str) -> list[Message]:
        """All messages exchanged by the pair, either direction, oldest first."""
        records = self.store.read(MESSAGES, [])
        return [
            Message.model_validate(r)
            for r in records
            if (r.get("from") == user_a and r.get("to") == user_b)
            or (r.get("from") == user_b and r.get("to") == user_a)
        ]

    def mark_messages_as_read(self, sender: str, recipient: str) -> bool:
        """Mark unread messages sent by sender to recipient. Returns whether any changed."""
        with self.store.locked(MESSAGES):
            records = self.store.read(MESSAGES, [])
            updated = False
            for r in records:
                if r.get("from") == sender and r.get("to") == recipient and not r.get("read"):
                    r["read"] = True
                    updated = True
            if updated:
                self.store.write(MESSAGES, records)
        return updated
