from typing import List, Optional

from pydantic import BaseModel

from .message import MessageOut


class ChatCreate(BaseModel):
    title: Optional[str] = ""


class ChatOut(BaseModel):
    id: int
    title: str
    created_at: str


class ChatWithMessagesOut(BaseModel):
    chat: ChatOut
    messages: List[MessageOut]
