from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from chatrooms.auth import get_current_user
from chatrooms.database import get_db
from chatrooms.models.user import User
from chatrooms.schemas.user import UserProfile
from chatrooms.security import PasswordHasher, get_password_hasher
from chatrooms.services.membership import MembershipAuthority

router = APIRouter()

@router.get("/me", response_model=UserProfile)
async def get_current_user_profile(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    current_user: User = Depends(get_current_user)
):
    """Profile of the current user with the chats they belong to"""
    membership = MembershipAuthority(db, hasher)
    return UserProfile(
        id=current_user.id,
        username=current_user.username,
        email=current_user.email,
        chats=await membership.list_chats(current_user),
    )
