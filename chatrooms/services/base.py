import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from chatrooms.exceptions import ChatroomsError, InternalError, StaleChatError

logger = logging.getLogger(__name__)


class BaseService:
    """Services own the transaction; repositories only flush."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def transaction(self, action: str):
        """Commit everything written inside the block, or nothing.

        Domain errors raised inside the block are re-raised unchanged after
        the rollback. Storage failures are logged with their cause and turned
        into ``InternalError``; a lost optimistic-version race becomes
        ``StaleChatError``.
        """
        try:
            yield
            await self.db.commit()
        except ChatroomsError:
            await self.db.rollback()
            raise
        except StaleDataError as e:
            await self.db.rollback()
            logger.warning("%s lost a concurrent update: %s", action, e)
            raise StaleChatError() from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception("%s failed", action)
            raise InternalError() from e
