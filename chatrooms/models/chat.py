from sqlalchemy import Column, Integer, String, JSON
from .base import BaseModel

class Chat(BaseModel):
    __tablename__ = "chats"

    hashed_password = Column(String(255), nullable=False)
    # Ordered list of {"chatId", "text", "author": {"id", "username"}} dicts.
    # Always reassign a new list; in-place mutation is not tracked.
    messages = Column(JSON, nullable=False, default=list)
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}
