from pydantic import BaseModel, Field
from typing import List
from chatrooms.config import settings
from chatrooms.schemas.chat import ChatResponse
from chatrooms.schemas.password import Password

class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=settings.USERNAME_MAX_LENGTH)
    email: str = Field(..., min_length=3, max_length=settings.EMAIL_MAX_LENGTH)
    password: Password = Field(..., min_length=1)

class UserLogin(BaseModel):
    email: str
    password: Password

class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    chats: List[ChatResponse] = []
    token: str

class UserProfile(BaseModel):
    id: int
    username: str
    email: str
    chats: List[ChatResponse] = []

