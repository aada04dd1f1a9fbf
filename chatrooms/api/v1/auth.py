from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from chatrooms.database import get_db
from chatrooms.schemas.user import UserCreate, UserLogin, UserResponse
from chatrooms.security import PasswordHasher, get_password_hasher
from chatrooms.services.accounts import AccountService
from chatrooms.tokens import TokenIssuer, get_token_issuer

router = APIRouter()

@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer)
):
    accounts = AccountService(db, hasher, tokens)
    return await accounts.register(user_data)

@router.post("/login", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def login_user(
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer)
):
    accounts = AccountService(db, hasher, tokens)
    return await accounts.login(credentials)
