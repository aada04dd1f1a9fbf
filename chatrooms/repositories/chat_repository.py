from typing import Optional, List, Dict
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, and_

from chatrooms.models.chat import Chat
from chatrooms.models.chat_member import ChatMember

class ChatRepository:
    """Chat and membership persistence.

    Methods flush so ids and version checks happen immediately; the caller
    owns the transaction and decides when to commit or roll back.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, hashed_password: str, creator_id: int) -> Chat:
        chat = Chat(hashed_password=hashed_password, messages=[])
        self.db.add(chat)
        await self.db.flush()

        await self.add_member(chat.id, creator_id)
        return chat

    async def get_by_id(self, chat_id: int) -> Optional[Chat]:
        result = await self.db.execute(select(Chat).where(Chat.id == chat_id))
        return result.scalar_one_or_none()

    async def get_by_ids(self, chat_ids: List[int]) -> Dict[int, Chat]:
        """Map chat id -> Chat for the ids that exist."""
        if not chat_ids:
            return {}
        result = await self.db.execute(
            select(Chat).where(Chat.id.in_(list(set(chat_ids))))
        )
        return {chat.id: chat for chat in result.scalars().all()}

    async def get_member_ids(self, chat_id: int) -> List[int]:
        """User ids of the chat's members in join order."""
        members = await self.get_member_ids_by_chat([chat_id])
        return members.get(chat_id, [])

    async def get_member_ids_by_chat(self, chat_ids: List[int]) -> Dict[int, List[int]]:
        """Map chat id -> member user ids in join order, in one query."""
        if not chat_ids:
            return {}
        result = await self.db.execute(
            select(ChatMember.chat_id, ChatMember.user_id)
            .where(ChatMember.chat_id.in_(list(set(chat_ids))))
            .order_by(ChatMember.id)
        )
        members: Dict[int, List[int]] = {}
        for chat_id, user_id in result.all():
            members.setdefault(chat_id, []).append(user_id)
        return members

    async def is_member(self, chat_id: int, user_id: int) -> bool:
        result = await self.db.execute(
            select(ChatMember.id).where(
                and_(ChatMember.chat_id == chat_id, ChatMember.user_id == user_id)
            )
        )
        return result.scalar_one_or_none() is not None

    async def add_member(self, chat_id: int, user_id: int) -> ChatMember:
        """Insert a membership row. A duplicate raises IntegrityError on flush."""
        member = ChatMember(chat_id=chat_id, user_id=user_id)
        self.db.add(member)
        await self.db.flush()
        return member

    async def remove_member(self, chat_id: int, user_id: int) -> bool:
        result = await self.db.execute(
            delete(ChatMember).where(
                and_(ChatMember.chat_id == chat_id, ChatMember.user_id == user_id)
            )
        )
        return result.rowcount > 0

    async def append_message(self, chat: Chat, message: dict) -> Chat:
        """Append to the message blob; the version check runs on flush."""
        chat.messages = [*(chat.messages or []), message]
        await self.db.flush()
        return chat
