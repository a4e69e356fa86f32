from .chat import ChatCreate, ChatOut, ChatWithMessagesOut
from .message import MessageCreate, MessageOut
