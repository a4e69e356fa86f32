import logging
import re
from typing import Optional

from fastapi import APIRouter, Depends, Response

from ...services.chat_service import ChatService
from ...schemas import ChatCreate, ChatOut, ChatWithMessagesOut
from ..deps import INT64_MAX, INT64_MIN, ChatId, get_chat_service
from ..serializers import chat_to_out, chat_with_messages_to_out

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chats"])

_LIMIT_RE = re.compile(r"^[+-]?[0-9]+$")


def _parse_limit(raw: Optional[str]) -> int:
    # anything but a plain 64-bit integer falls back to 0, which the service turns into the default
    if raw is None or not _LIMIT_RE.match(raw):
        if raw is not None:
            logger.debug("Ignoring non-integer limit %r", raw)
        return 0
    value = int(raw)
    if value < INT64_MIN or value > INT64_MAX:
        logger.debug("Ignoring out-of-range limit %r", raw)
        return 0
    return value


@router.post("/chats", response_model=ChatOut, status_code=201)
def create_chat(payload: ChatCreate, service: ChatService = Depends(get_chat_service)):
    chat = service.create_chat(payload.title or "")
    return chat_to_out(chat)


@router.get("/chats/{chatId}", response_model=ChatWithMessagesOut)
def get_chat(
    chatId: ChatId,
    limit: Optional[str] = None,
    service: ChatService = Depends(get_chat_service),
):
    view = service.get_chat_with_messages(chatId, _parse_limit(limit))
    return chat_with_messages_to_out(view)


@router.delete("/chats/{chatId}", status_code=204)
def delete_chat(chatId: ChatId, service: ChatService = Depends(get_chat_service)):
    service.delete_chat(chatId)
    return Response(status_code=204)
