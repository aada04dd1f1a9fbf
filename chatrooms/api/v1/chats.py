from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from chatrooms.auth import get_current_user
from chatrooms.database import get_db
from chatrooms.exceptions import ValidationError
from chatrooms.models.user import User
from chatrooms.schemas.chat import ChatCreate, ChatJoin, ChatResponse, LeaveChatResponse
from chatrooms.schemas.message import MessageCreate, MessageResponse
from chatrooms.security import PasswordHasher, get_password_hasher
from chatrooms.services.membership import MembershipAuthority

router = APIRouter()

@router.get("/", response_model=List[ChatResponse])
async def get_user_chats(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    current_user: User = Depends(get_current_user)
):
    """All chats the current user belongs to"""
    membership = MembershipAuthority(db, hasher)
    return await membership.list_chats(current_user)

@router.post("/create", response_model=ChatResponse, status_code=status.HTTP_201_CREATED)
async def create_chat(
    chat_data: ChatCreate,
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    current_user: User = Depends(get_current_user)
):
    """Create a password-protected chat with the current user as its only member"""
    membership = MembershipAuthority(db, hasher)
    return await membership.create_chat(current_user, chat_data.password)

@router.get("/{chat_id}", response_model=ChatResponse)
async def get_chat(
    chat_id: int,
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    current_user: User = Depends(get_current_user)
):
    membership = MembershipAuthority(db, hasher)
    return await membership.get_chat(current_user, chat_id)

@router.post("/{chat_id}", response_model=ChatResponse)
async def join_chat(
    chat_id: int,
    join_data: ChatJoin,
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    current_user: User = Depends(get_current_user)
):
    """Join a chat with its password; joining a chat twice is a no-op"""
    if join_data.id is not None and join_data.id != chat_id:
        raise ValidationError("chat id in body does not match the url")

    membership = MembershipAuthority(db, hasher)
    return await membership.join_chat(current_user, chat_id, join_data.password)

@router.delete("/{chat_id}", response_model=LeaveChatResponse)
async def leave_chat(
    chat_id: int,
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    current_user: User = Depends(get_current_user)
):
    membership = MembershipAuthority(db, hasher)
    await membership.leave_chat(current_user, chat_id)
    return {"message": "chat left"}

@router.post("/{chat_id}/messages", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    chat_id: int,
    message_data: MessageCreate,
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    current_user: User = Depends(get_current_user)
):
    membership = MembershipAuthority(db, hasher)
    return await membership.send_message(current_user, chat_id, message_data.text)
