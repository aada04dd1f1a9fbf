from typing import Optional, List, Dict, Iterable
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from chatrooms.models.user import User
from chatrooms.models.chat_member import ChatMember

class UserRepository:
    """User persistence. Writes are flushed, never committed here."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, username: str, email: str, hashed_password: str) -> User:
        db_user = User(
            username=username,
            email=email,
            hashed_password=hashed_password
        )
        self.db.add(db_user)
        await self.db.flush()
        return db_user

    async def get_by_id(self, user_id: int) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        result = await self.db.execute(select(User.id).where(User.email == email))
        return result.scalar_one_or_none() is not None

    async def get_usernames(self, user_ids: Iterable[int]) -> Dict[int, str]:
        """Map user id -> username. Result order from the store is not relied on."""
        ids = set(user_ids)
        if not ids:
            return {}
        result = await self.db.execute(
            select(User.id, User.username).where(User.id.in_(list(ids)))
        )
        return {user_id: username for user_id, username in result.all()}

    async def get_chat_ids(self, user_id: int) -> List[int]:
        result = await self.db.execute(
            select(ChatMember.chat_id)
            .where(ChatMember.user_id == user_id)
            .order_by(ChatMember.id)
        )
        return list(result.scalars().all())
