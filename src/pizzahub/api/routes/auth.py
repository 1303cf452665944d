from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pizzahub.core.security import create_access_token
from pizzahub.crud.user import authenticate, create_user
from pizzahub.db.session import get_async_session
from pizzahub.schemas.user import AuthResponse, UserLogin, UserOut, UserRegister

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(user_in: UserRegister, db: AsyncSession = Depends(get_async_session)):
    """
    Регистрация: создаёт пользователя и сразу выдаёт токен.
    """
    user = await create_user(db, user_in)
    return AuthResponse(
        message="User created successfully",
        token=create_access_token(user),
        user=UserOut.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(credentials: UserLogin, db: AsyncSession = Depends(get_async_session)):
    user, token = await authenticate(db, credentials.email, credentials.password)
    return AuthResponse(
        message="Logged in successfully",
        token=token,
        user=UserOut.model_validate(user),
    )
