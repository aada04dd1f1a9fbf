from fastapi import status


class ChatroomsError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "internal server error"

    def __init__(self, detail: str = None) -> None:
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class ValidationError(ChatroomsError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "invalid request"


class InvalidCredentialsError(ChatroomsError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "invalid email or password"


class ConflictError(ChatroomsError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "user already exists"


class StaleChatError(ChatroomsError):
    status_code = status.HTTP_409_CONFLICT
    detail = "chat was modified concurrently, retry the request"


class AuthError(ChatroomsError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "not authorized"


class NotFoundError(ChatroomsError):
    """Raised for absent entities and for entities the caller may not see.

    Both cases share one message so a caller cannot tell which chats exist.
    """

    status_code = status.HTTP_404_NOT_FOUND
    detail = "page not found"


class InternalError(ChatroomsError):
    pass


class CorruptCredentialError(InternalError):
    def __init__(self, reason: str) -> None:
        super().__init__()
        self.reason: str = reason
