from pydantic import BaseModel, Field
from typing import Optional, List
from chatrooms.schemas.message import AuthorResponse, MessageResponse
from chatrooms.schemas.password import Password

class ChatCreate(BaseModel):
    password: Password = Field(..., min_length=1)

class ChatJoin(BaseModel):
    # optional; when sent it must match the chat id in the path
    id: Optional[int] = None
    password: Password

class ChatResponse(BaseModel):
    id: int
    messages: List[MessageResponse] = []
    users: List[AuthorResponse] = []

class LeaveChatResponse(BaseModel):
    message: str
