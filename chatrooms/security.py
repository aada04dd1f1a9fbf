import logging

from passlib.context import CryptContext

from chatrooms.config import settings
from chatrooms.exceptions import CorruptCredentialError, ValidationError

logger = logging.getLogger(__name__)


class PasswordHasher:
    """One-way salted hashing for user and chat passwords (bcrypt).

    bcrypt silently ignores everything past the first 72 bytes of a secret,
    so longer passwords are refused instead of being truncated.
    """

    def __init__(self, rounds: int = None):
        self.rounds = rounds or settings.BCRYPT_ROUNDS
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=self.rounds,
        )

    def hash(self, plaintext: str) -> str:
        self._check_length(plaintext)
        return self._context.hash(plaintext)

    def verify(self, hashed: str, plaintext: str) -> bool:
        """Return True iff ``plaintext`` matches ``hashed``.

        A mismatch is a plain False; a stored hash that cannot be parsed is
        data corruption and raises ``CorruptCredentialError``. An over-long
        ``plaintext`` raises ``ValidationError``.
        """
        self._check_length(plaintext)
        try:
            return self._context.verify(plaintext, hashed)
        except (ValueError, TypeError) as e:
            logger.error("Stored password hash could not be verified: %s", e)
            raise CorruptCredentialError(str(e)) from e

    @staticmethod
    def _check_length(plaintext: str) -> None:
        if len(plaintext.encode("utf-8")) > settings.PASSWORD_MAX_BYTES:
            raise ValidationError(f"password must be at most {settings.PASSWORD_MAX_BYTES} bytes")


password_hasher = PasswordHasher()


def get_password_hasher() -> PasswordHasher:
    return password_hasher
