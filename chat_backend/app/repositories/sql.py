"""
SQLAlchemy repository implementations.

Each repository wraps one request-scoped Session. Every SQLAlchemyError is
rolled back and re-raised as StorageError with the original chained.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.errors import NotFoundError, StorageError
from ..db import tables
from ..models import Chat, Message
from .base import ChatRepository, MessageRepository

logger = logging.getLogger(__name__)


@contextmanager
def _storage_errors(db: Session, action: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Storage failure while trying to %s", action)
        raise StorageError(f"failed to {action}") from e


def _chat_to_entity(row: tables.Chat) -> Chat:
    return Chat(id=row.id, title=row.title, created_at=row.created_at)


def _message_to_entity(row: tables.Message) -> Message:
    return Message(id=row.id, chat_id=row.chat_id, text=row.text, created_at=row.created_at)


class SqlChatRepository(ChatRepository):
    def __init__(self, db: Session):
        self._db = db

    def create(self, chat: Chat) -> Chat:
        with _storage_errors(self._db, "create chat"):
            row = tables.Chat(title=chat.title)
            self._db.add(row)
            self._db.commit()
            self._db.refresh(row)
        chat.id = row.id
        chat.created_at = row.created_at
        return chat

    def delete(self, chat_id: int) -> None:
        with _storage_errors(self._db, "delete chat"):
            # explicit message delete keeps the cascade when the FK pragma is off
            self._db.query(tables.Message).filter(tables.Message.chat_id == chat_id).delete(
                synchronize_session=False
            )
            deleted = self._db.query(tables.Chat).filter(tables.Chat.id == chat_id).delete(
                synchronize_session=False
            )
            if deleted == 0:
                self._db.rollback()
                raise NotFoundError("chat not found")
            self._db.commit()

    def exists(self, chat_id: int) -> bool:
        with _storage_errors(self._db, "check chat existence"):
            row = self._db.query(tables.Chat.id).filter(tables.Chat.id == chat_id).first()
        return row is not None

    def get_by_id(self, chat_id: int) -> Optional[Chat]:
        with _storage_errors(self._db, "load chat"):
            row = self._db.get(tables.Chat, chat_id)
        return _chat_to_entity(row) if row else None


class SqlMessageRepository(MessageRepository):
    def __init__(self, db: Session):
        self._db = db

    def create(self, message: Message) -> Message:
        with _storage_errors(self._db, "create message"):
            row = tables.Message(chat_id=message.chat_id, text=message.text)
            self._db.add(row)
            self._db.commit()
            self._db.refresh(row)
        message.id = row.id
        message.created_at = row.created_at
        return message

    def get_by_chat_id(self, chat_id: int, limit: int) -> List[Message]:
        with _storage_errors(self._db, "load messages"):
            rows = (
                self._db.query(tables.Message)
                .filter(tables.Message.chat_id == chat_id)
                .order_by(tables.Message.created_at.desc(), tables.Message.id.desc())
                .limit(limit)
                .all()
            )
        return [_message_to_entity(r) for r in rows]
