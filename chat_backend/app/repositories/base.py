"""
Repository ports - persistence interfaces the chat service depends on.

Implementations:
- SQLAlchemy: repositories/sql.py
- In-memory (tests): repositories/memory.py
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models import Chat, Message


class ChatRepository(ABC):
    @abstractmethod
    def create(self, chat: Chat) -> Chat:
        """Persist a new chat, filling in its id and created_at."""

    @abstractmethod
    def delete(self, chat_id: int) -> None:
        """Delete a chat and all of its messages. Raises NotFoundError if absent."""

    @abstractmethod
    def exists(self, chat_id: int) -> bool: ...

    @abstractmethod
    def get_by_id(self, chat_id: int) -> Optional[Chat]:
        """Return the chat, or None when there is no such chat."""


class MessageRepository(ABC):
    @abstractmethod
    def create(self, message: Message) -> Message:
        """Persist a new message, filling in its id and created_at."""

    @abstractmethod
    def get_by_chat_id(self, chat_id: int, limit: int) -> List[Message]:
        """Return up to `limit` messages of the chat, newest first."""
