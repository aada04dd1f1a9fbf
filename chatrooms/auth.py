import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from chatrooms.database import get_db
from chatrooms.exceptions import AuthError
from chatrooms.models.user import User
from chatrooms.repositories.user_repository import UserRepository
from chatrooms.tokens import TokenIssuer, get_token_issuer

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> User:
    if credentials is None:
        raise AuthError()

    user_id = tokens.validate(credentials.credentials)

    user = await UserRepository(db).get_by_id(user_id)
    if user is None:
        logger.warning("Token subject %s does not match any user", user_id)
        raise AuthError()
    return user
