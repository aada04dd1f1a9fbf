import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt

from chatrooms.config import settings
from chatrooms.exceptions import AuthError

logger = logging.getLogger(__name__)


class TokenIssuer:
    """Signs and checks bearer identity tokens.

    The signing secret is handed in at construction and never re-read from
    the environment. ``key_id`` is written to the ``kid`` header so a future
    verifier can pick between several keys.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_minutes: int = 30,
        key_id: Optional[str] = None,
    ):
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.expires_delta = timedelta(minutes=expires_minutes)
        self.key_id = key_id or None

    def issue(self, user_id: int, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": str(user_id),
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.expires_delta).timestamp()),
        }
        headers = {"kid": self.key_id} if self.key_id else None
        return jwt.encode(claims, self._secret, algorithm=self.algorithm, headers=headers)

    def validate(self, token: str) -> int:
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            logger.warning("Rejected expired token")
            raise AuthError()
        except JWTError as e:
            logger.warning("Rejected invalid token: %s", e)
            raise AuthError()

        subject = payload.get("sub")
        if subject is None:
            logger.warning("Rejected token without subject claim")
            raise AuthError()
        try:
            return int(subject)
        except (TypeError, ValueError):
            logger.warning("Rejected token with non-numeric subject %r", subject)
            raise AuthError()


token_issuer = TokenIssuer(
    secret=settings.SECRET_KEY,
    algorithm=settings.ALGORITHM,
    expires_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    key_id=settings.TOKEN_KEY_ID,
)


def get_token_issuer() -> TokenIssuer:
    return token_issuer
