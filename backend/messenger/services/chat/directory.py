"""Chat directory: the conversations (participant pairs) each user belongs to."""

import logging

from messenger.core.ids import next_id
from messenger.models.chat import Conversation
from messenger.services.storage.base import BaseCollectionStore

logger = logging.getLogger(__name__)

CHATS = "chats"


class ChatDirectory:
    def __init__(self, store: BaseCollectionStore):
        self.store = store

    def get_chats_for_user(self, username: str) -> list[Conversation]:
        records = self.store.read(CHATS, [])
        return [
            Conversation.model_validate(r)
            for r in records
            if username in r.get("participants", [])
        ]

    def ensure_conversation(self, user_a: str, user_b: str) -> Conversation:
        """Return user_a's conversation with user_b, creating it if none exists.

        The lookup and the insert share one critical section so concurrent
        sends for the same pair cannot create duplicates.
        """
        with self.store.locked(CHATS):
            for chat in self.get_chats_for_user(user_a):
                if chat.counterpart(user_a) == user_b:
                    return chat

            chat = Conversation(id=next_id(), participants=[user_a, user_b])
            records = self.store.read(CHATS, [])
            records.append(chat.model_dump())
            self.store.write(CHATS, records)

        logger.info(f"Created conversation {chat.id} between {user_a} and {user_b}")
        return chat
