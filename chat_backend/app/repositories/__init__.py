from .base import ChatRepository, MessageRepository
from .memory import InMemoryChatRepository, InMemoryMessageRepository, InMemoryStore
from .sql import SqlChatRepository, SqlMessageRepository

__all__ = [
    "ChatRepository",
    "MessageRepository",
    "InMemoryChatRepository",
    "InMemoryMessageRepository",
    "InMemoryStore",
    "SqlChatRepository",
    "SqlMessageRepository",
]
