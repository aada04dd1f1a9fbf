from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint
from .base import BaseModel

class ChatMember(BaseModel):
    """One row per (chat, user) pair; ``created_at`` is the join time.

    Both User.chats and Chat.users are read from this table through
    ChatRepository and UserRepository, so the two sides of the membership
    relation cannot disagree.
    """

    __tablename__ = "chat_members"

    chat_id = Column(Integer, ForeignKey("chats.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("chat_id", "user_id", name="unique_chat_member"),
    )
