from typing import Annotated

from pydantic import AfterValidator

from chatrooms.config import settings


def check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > settings.PASSWORD_MAX_BYTES:
        raise ValueError(f"password must be at most {settings.PASSWORD_MAX_BYTES} bytes")
    return value


Password = Annotated[str, AfterValidator(check_password_bytes)]
