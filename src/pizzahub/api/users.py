from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pizzahub.api.deps import get_current_user
from pizzahub.crud.user import update_profile
from pizzahub.db.session import get_async_session
from pizzahub.models.user import User
from pizzahub.schemas.user import ProfileUpdateResponse, UserOut, UserUpdate

router = APIRouter(prefix="/api/user", tags=["users"])


@router.get("", response_model=UserOut)
async def get_profile(user: User = Depends(get_current_user)):
    return user


@router.put("", response_model=ProfileUpdateResponse)
async def update_profile_endpoint(
    user_in: UserUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Обновление имени, телефона и (с текущим паролем) пароля.
    """
    updated = await update_profile(db, user.id, user_in)
    return ProfileUpdateResponse(
        message="Profile updated successfully",
        user=UserOut.model_validate(updated),
    )
