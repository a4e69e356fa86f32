from datetime import datetime, timezone
from typing import Any, Dict

from ..models import Chat, ChatWithMessages, Message


def _iso(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def chat_to_out(chat: Chat) -> Dict[str, Any]:
    return {"id": chat.id, "title": chat.title, "created_at": _iso(chat.created_at)}


def message_to_out(message: Message) -> Dict[str, Any]:
    return {
        "id": message.id,
        "chat_id": message.chat_id,
        "text": message.text,
        "created_at": _iso(message.created_at),
    }


def chat_with_messages_to_out(view: ChatWithMessages) -> Dict[str, Any]:
    return {
        "chat": chat_to_out(view.chat),
        "messages": [message_to_out(m) for m in view.messages],
    }
