from typing import Annotated

from fastapi import Depends, Path
from sqlalchemy.orm import Session

from ..db.database import get_db
from ..repositories.sql import SqlChatRepository, SqlMessageRepository
from ..services.chat_service import ChatService

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# ids outside the 64-bit range are rejected before they reach storage
ChatId = Annotated[int, Path(ge=INT64_MIN, le=INT64_MAX)]


def get_chat_service(db: Session = Depends(get_db)) -> ChatService:
    return ChatService(SqlChatRepository(db), SqlMessageRepository(db))
