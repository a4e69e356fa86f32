from typing import Optional

from pydantic import BaseModel


class MessageCreate(BaseModel):
    text: Optional[str] = ""


class MessageOut(BaseModel):
    id: int
    chat_id: int
    text: str
    created_at: str
