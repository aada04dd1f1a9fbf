import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from chatrooms.exceptions import ConflictError, InternalError, InvalidCredentialsError
from chatrooms.repositories.user_repository import UserRepository
from chatrooms.schemas.user import UserCreate, UserLogin, UserResponse
from chatrooms.security import PasswordHasher
from chatrooms.services.base import BaseService
from chatrooms.services.membership import MembershipAuthority
from chatrooms.tokens import TokenIssuer

logger = logging.getLogger(__name__)


class AccountService(BaseService):
    """Registration and login."""

    def __init__(self, db: AsyncSession, hasher: PasswordHasher, tokens: TokenIssuer):
        super().__init__(db)
        self.hasher = hasher
        self.tokens = tokens
        self.users = UserRepository(db)

    async def register(self, user_data: UserCreate) -> UserResponse:
        if await self.users.exists_by_email(user_data.email):
            raise ConflictError()

        hashed_password = await run_in_threadpool(self.hasher.hash, user_data.password)
        try:
            user = await self.users.create(user_data.username, user_data.email, hashed_password)
            await self.db.commit()
        except IntegrityError as e:
            # lost a race against another registration with the same email
            await self.db.rollback()
            raise ConflictError() from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception("register user failed")
            raise InternalError() from e

        logger.info("Registered user %s", user.id)
        return UserResponse(
            id=user.id,
            username=user.username,
            email=user.email,
            chats=[],
            token=self.tokens.issue(user.id),
        )

    async def login(self, credentials: UserLogin) -> UserResponse:
        # unknown email and wrong password are reported the same way
        user = await self.users.get_by_email(credentials.email)
        if user is None:
            raise InvalidCredentialsError()
        if not await run_in_threadpool(self.hasher.verify, user.hashed_password, credentials.password):
            raise InvalidCredentialsError()

        chats = await MembershipAuthority(self.db, self.hasher).list_chats(user)
        return UserResponse(
            id=user.id,
            username=user.username,
            email=user.email,
            chats=chats,
            token=self.tokens.issue(user.id),
        )
