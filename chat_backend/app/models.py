"""
Domain entities.

id and created_at are assigned by storage on create, so they stay None until
the entity has been persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class Chat:
    title: str
    id: Optional[int] = None
    created_at: Optional[datetime] = None


@dataclass
class Message:
    chat_id: int
    text: str
    id: Optional[int] = None
    created_at: Optional[datetime] = None


@dataclass
class ChatWithMessages:
    """A chat plus its most recent messages, newest first."""

    chat: Chat
    messages: List[Message] = field(default_factory=list)
