"""Per-user chat list rows derived from conversations and their message history."""

from messenger.models.chat import ChatSummary
from messenger.services.chat.directory import ChatDirectory
from messenger.services.chat.messages import MessageStore
from messenger.services.users import UserDirectory


class ChatSummaryProjector:
    def __init__(self, directory: ChatDirectory, messages: MessageStore, users: UserDirectory):
        self.directory = directory
        self.messages = messages
        self.users = users

    def project_summaries(self, username: str) -> list[ChatSummary]:
        summaries = []
        for chat in self.directory.get_chats_for_user(username):
            other = chat.counterpart(username)
            history = self.messages.get_messages_between(username, other)
            last = history[-1] if history else None
            summaries.append(
                ChatSummary(
                    id=chat.id,
                    name=other,
                    avatar=self.users.avatar_for(other),
                    lastMessage=(last.text or "") if last else "",
                    lastTime=last.timestamp if last else None,
                    unreadCount=sum(1 for m in history if m.recipient == username and not m.read),
                )
            )
        return summaries
