from fastapi import APIRouter, Depends

from ...services.chat_service import ChatService
from ...schemas import MessageCreate, MessageOut
from ..deps import ChatId, get_chat_service
from ..serializers import message_to_out

router = APIRouter(tags=["messages"])


@router.post("/chats/{chatId}/messages", response_model=MessageOut, status_code=201)
def create_message(chatId: ChatId, payload: MessageCreate, service: ChatService = Depends(get_chat_service)):
    message = service.create_message(chatId, payload.text or "")
    return message_to_out(message)
