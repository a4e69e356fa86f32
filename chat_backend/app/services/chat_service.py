import logging

from ..core.config import Settings
from ..core.errors import InvalidArgumentError, NotFoundError
from ..models import Chat, ChatWithMessages, Message
from ..repositories.base import ChatRepository, MessageRepository

logger = logging.getLogger(__name__)


def normalize_limit(limit: int) -> int:
    if limit <= 0:
        return Settings.DEFAULT_MESSAGE_LIMIT
    if limit > Settings.MAX_MESSAGE_LIMIT:
        return Settings.MAX_MESSAGE_LIMIT
    return limit


class ChatService:
    """
    Validates input and orchestrates the chat and message repositories.

    Holds no state besides the injected repositories. Existence checks run
    before content validation, and storage errors propagate unchanged.
    Length limits are checked on the stripped value, in characters.
    """

    def __init__(self, chat_repo: ChatRepository, message_repo: MessageRepository):
        self._chat_repo = chat_repo
        self._message_repo = message_repo

    def create_chat(self, title: str) -> Chat:
        title = title.strip()
        if not title:
            raise InvalidArgumentError("title cannot be empty")
        if len(title) > Settings.MAX_TITLE_LENGTH:
            raise InvalidArgumentError(f"title must be 1-{Settings.MAX_TITLE_LENGTH} characters")

        chat = self._chat_repo.create(Chat(title=title))
        logger.info("Created chat id=%s", chat.id)
        return chat

    def get_chat_with_messages(self, chat_id: int, limit: int) -> ChatWithMessages:
        limit = normalize_limit(limit)

        chat = self._chat_repo.get_by_id(chat_id)
        if chat is None:
            raise NotFoundError("chat not found")

        messages = self._message_repo.get_by_chat_id(chat_id, limit)
        return ChatWithMessages(chat=chat, messages=messages)

    def delete_chat(self, chat_id: int) -> None:
        self._chat_repo.delete(chat_id)
        logger.info("Deleted chat id=%s", chat_id)

    def create_message(self, chat_id: int, text: str) -> Message:
        if not self._chat_repo.exists(chat_id):
            raise NotFoundError("chat not found")

        text = text.strip()
        if not text:
            raise InvalidArgumentError("text cannot be empty")
        if len(text) > Settings.MAX_TEXT_LENGTH:
            raise InvalidArgumentError(f"text must be 1-{Settings.MAX_TEXT_LENGTH} characters")

        message = self._message_repo.create(Message(chat_id=chat_id, text=text))
        logger.info("Created message id=%s in chat id=%s", message.id, chat_id)
        return message
