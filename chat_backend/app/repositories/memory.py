"""
In-memory repositories sharing one InMemoryStore, used as test doubles.

They follow the same contract as the SQL repositories: ids are assigned
sequentially, created_at is stamped on create, deleting a chat drops its
messages.
"""

from dataclasses import replace
from datetime import datetime, timezone
from itertools import count
from typing import Dict, List, Optional

from ..core.errors import NotFoundError
from ..models import Chat, Message
from .base import ChatRepository, MessageRepository


class InMemoryStore:
    def __init__(self):
        self.chats: Dict[int, Chat] = {}
        self.messages: Dict[int, Message] = {}
        self._chat_ids = count(1)
        self._message_ids = count(1)

    def next_chat_id(self) -> int:
        return next(self._chat_ids)

    def next_message_id(self) -> int:
        return next(self._message_ids)


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class InMemoryChatRepository(ChatRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    def create(self, chat: Chat) -> Chat:
        chat.id = self._store.next_chat_id()
        chat.created_at = _now()
        self._store.chats[chat.id] = replace(chat)
        return chat

    def delete(self, chat_id: int) -> None:
        if self._store.chats.pop(chat_id, None) is None:
            raise NotFoundError("chat not found")
        for message_id in [m.id for m in self._store.messages.values() if m.chat_id == chat_id]:
            del self._store.messages[message_id]

    def exists(self, chat_id: int) -> bool:
        return chat_id in self._store.chats

    def get_by_id(self, chat_id: int) -> Optional[Chat]:
        chat = self._store.chats.get(chat_id)
        return replace(chat) if chat else None


class InMemoryMessageRepository(MessageRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    def create(self, message: Message) -> Message:
        message.id = self._store.next_message_id()
        message.created_at = _now()
        self._store.messages[message.id] = replace(message)
        return message

    def get_by_chat_id(self, chat_id: int, limit: int) -> List[Message]:
        messages = [m for m in self._store.messages.values() if m.chat_id == chat_id]
        messages.sort(key=lambda m: (m.created_at, m.id), reverse=True)
        return [replace(m) for m in messages[:limit]]
