"""Membership rules for chat rooms.

Decides who may create, read, join, leave and post to a chat. Membership is
a single ``chat_members`` row per (chat, user), so a user's chat set and a
chat's member set are two views of the same rows and every change to them
happens inside one transaction.

A chat the caller does not belong to is reported exactly like a chat that
does not exist.
"""
import logging
from typing import List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from chatrooms.exceptions import AuthError, InternalError, NotFoundError
from chatrooms.models.chat import Chat
from chatrooms.models.user import User
from chatrooms.repositories.chat_repository import ChatRepository
from chatrooms.repositories.user_repository import UserRepository
from chatrooms.schemas.chat import ChatResponse
from chatrooms.schemas.message import AuthorResponse, MessageResponse
from chatrooms.security import PasswordHasher
from chatrooms.services.base import BaseService

logger = logging.getLogger(__name__)


class MembershipAuthority(BaseService):
    def __init__(self, db: AsyncSession, hasher: PasswordHasher):
        super().__init__(db)
        self.hasher = hasher
        self.chats = ChatRepository(db)
        self.users = UserRepository(db)

    async def create_chat(self, creator: User, password: str) -> ChatResponse:
        creator_id = creator.id
        hashed_password = await run_in_threadpool(self.hasher.hash, password)

        async with self.transaction("create chat"):
            chat = await self.chats.create(hashed_password, creator_id)

        logger.info("User %s created chat %s", creator_id, chat.id)
        return await self._chat_view(chat)

    async def get_chat(self, requester: User, chat_id: int) -> ChatResponse:
        if not await self.chats.is_member(chat_id, requester.id):
            raise NotFoundError()

        chat = await self.chats.get_by_id(chat_id)
        if chat is None:
            raise NotFoundError()
        return await self._chat_view(chat)

    async def list_chats(self, requester: User) -> List[ChatResponse]:
        chat_ids = await self.users.get_chat_ids(requester.id)
        chats = await self.chats.get_by_ids(chat_ids)
        return await self._chat_views([chats[chat_id] for chat_id in chat_ids if chat_id in chats])

    async def join_chat(self, requester: User, chat_id: int, password: str) -> ChatResponse:
        requester_id = requester.id

        chat = await self.chats.get_by_id(chat_id)
        if chat is None:
            raise NotFoundError()

        if not await run_in_threadpool(self.hasher.verify, chat.hashed_password, password):
            logger.warning("User %s sent a wrong password for chat %s", requester_id, chat_id)
            raise AuthError()

        if await self.chats.is_member(chat_id, requester_id):
            return await self._chat_view(chat)

        try:
            await self.chats.add_member(chat_id, requester_id)
            await self.db.commit()
        except IntegrityError:
            # a concurrent request inserted the same membership first
            await self.db.rollback()
            logger.info("User %s was already added to chat %s", requester_id, chat_id)
            chat = await self.chats.get_by_id(chat_id)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception("join chat %s by user %s failed", chat_id, requester_id)
            raise InternalError() from e
        else:
            logger.info("User %s joined chat %s", requester_id, chat_id)

        return await self._chat_view(chat)

    async def leave_chat(self, requester: User, chat_id: int) -> None:
        requester_id = requester.id
        if not await self.chats.is_member(chat_id, requester_id):
            raise NotFoundError()

        async with self.transaction("leave chat"):
            # a concurrent leave may have removed the row already
            if not await self.chats.remove_member(chat_id, requester_id):
                raise NotFoundError()

        logger.info("User %s left chat %s", requester_id, chat_id)

    async def send_message(self, requester: User, chat_id: int, text: str) -> MessageResponse:
        requester_id, username = requester.id, requester.username

        if not await self.chats.is_member(chat_id, requester_id):
            raise NotFoundError()
        chat = await self.chats.get_by_id(chat_id)
        if chat is None:
            raise NotFoundError()

        message = {
            "chatId": chat_id,
            "text": text,
            "author": {"id": requester_id, "username": username},
        }
        async with self.transaction("send message"):
            await self.chats.append_message(chat, message)

        return MessageResponse.model_validate(message)

    async def list_authors(self, user_ids: List[int]) -> List[AuthorResponse]:
        """Resolve ``{id, username}`` for ``user_ids``, keeping their order."""
        usernames = await self.users.get_usernames(user_ids)

        missing = [user_id for user_id in user_ids if user_id not in usernames]
        if missing:
            logger.error("Member ids without a user record: %s", missing)
            raise InternalError()

        return [AuthorResponse(id=user_id, username=usernames[user_id]) for user_id in user_ids]

    async def _chat_view(self, chat: Chat) -> ChatResponse:
        views = await self._chat_views([chat])
        return views[0]

    async def _chat_views(self, chats: List[Chat]) -> List[ChatResponse]:
        # members and usernames for every chat come from one query each
        member_ids = await self.chats.get_member_ids_by_chat([chat.id for chat in chats])
        authors = await self.list_authors(
            [user_id for chat in chats for user_id in member_ids.get(chat.id, [])]
        )
        by_id = {author.id: author for author in authors}

        return [
            ChatResponse(
                id=chat.id,
                messages=[MessageResponse.model_validate(m) for m in chat.messages or []],
                users=[by_id[user_id] for user_id in member_ids.get(chat.id, [])],
            )
            for chat in chats
        ]
