import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pizzahub.core.errors import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    ServerError,
    ValidationError,
    WrongPasswordError,
)
from pizzahub.core.security import create_access_token, hash_password, verify_password
from pizzahub.db.session import transaction
from pizzahub.models import RoleEnum, User
from pizzahub.schemas.user import UserRegister, UserUpdate

logger = logging.getLogger(__name__)


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email.strip().lower()))
    return result.scalars().first()


async def get_user_by_id(db: AsyncSession, user_id: int) -> Optional[User]:
    return await db.get(User, user_id)


async def create_user(
    db: AsyncSession,
    user_in: UserRegister,
    role: RoleEnum = RoleEnum.customer,
) -> User:
    """
    Регистрирует пользователя.
    Email уникален: повтор даёт ConflictError (проверка до вставки
    плюс уникальный индекс на случай гонки).
    """
    if await get_user_by_email(db, user_in.email):
        raise ConflictError()

    user = User(
        name=user_in.name,
        email=user_in.email,
        phone=user_in.phone,
        password_hash=hash_password(user_in.password),
        role=role,
    )
    try:
        async with transaction(db):
            db.add(user)
    except IntegrityError:
        raise ConflictError()
    except SQLAlchemyError:
        logger.exception("Failed to create user")
        raise ServerError("Failed to create user")

    await db.refresh(user)
    logger.info(f"User registered: id={user.id} email={user.email}")
    return user


async def authenticate(db: AsyncSession, email: str, password: str) -> tuple[User, str]:
    """
    Проверяет email/пароль и выдаёт токен.
    Неизвестный email и неверный пароль неразличимы для клиента.
    """
    user = await get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        raise InvalidCredentialsError()

    logger.info(f"User logged in: id={user.id}")
    return user, create_access_token(user)


async def update_profile(db: AsyncSession, user_id: int, user_in: UserUpdate) -> User:
    """
    Частичное обновление профиля: имя, телефон, пароль.
    Для смены пароля нужен текущий пароль.
    """
    user = await get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")

    update_data = user_in.model_dump(exclude_unset=True, exclude_none=True)

    new_password = update_data.pop("new_password", None)
    current_password = update_data.pop("current_password", None)

    try:
        async with transaction(db):
            if new_password:
                if not current_password:
                    raise ValidationError("Current password is required to change password")
                if not verify_password(current_password, user.password_hash):
                    raise WrongPasswordError()
                user.password_hash = hash_password(new_password)

            for key, value in update_data.items():
                value = value.strip()
                if not value:
                    raise ValidationError(f"{key} must not be blank")
                setattr(user, key, value)
    except SQLAlchemyError:
        logger.exception(f"Failed to update user id={user_id}")
        raise ServerError("Failed to update profile")

    await db.refresh(user)
    return user


async def ensure_admin(db: AsyncSession, name: str, email: str, phone: str, password: str) -> User:
    """
    Создаёт админа при старте, если его ещё нет.
    """
    user = await get_user_by_email(db, email)
    if user:
        if user.role != RoleEnum.admin:
            user.role = RoleEnum.admin
            await db.commit()
        return user

    return await create_user(
        db,
        UserRegister(name=name, email=email, phone=phone, password=password),
        role=RoleEnum.admin,
    )
