from .base import Base
from .user import User
from .chat import Chat
from .chat_member import ChatMember

__all__ = [
    "Base",
    "User",
    "Chat",
    "ChatMember",
]
