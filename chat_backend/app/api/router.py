from fastapi import APIRouter
from .routes import chats
from .routes import messages

router = APIRouter()
router.include_router(chats.router, prefix="/api")
router.include_router(messages.router, prefix="/api")
