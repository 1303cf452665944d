import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from pizzahub.core.errors import ForbiddenError, NotFoundError
from pizzahub.core.security import TokenClaims, verify_token
from pizzahub.crud.user import get_user_by_id
from pizzahub.db.session import get_async_session
from pizzahub.models import Capability, User

logger = logging.getLogger(__name__)

# auto_error=False: отсутствие заголовка обрабатываем сами (401 в формате {"error": ...})
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenClaims:
    token = credentials.credentials if credentials else None
    return verify_token(token)


async def get_current_user(
    claims: TokenClaims = Depends(get_current_claims),
    db: AsyncSession = Depends(get_async_session),
) -> User:
    user = await get_user_by_id(db, claims.user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def require_capability(capability: Capability):
    """
    Зависимость: текущий пользователь должен обладать capability.
    """

    async def checker(user: User = Depends(get_current_user)) -> User:
        if not user.can(capability):
            logger.warning(f"User id={user.id} denied capability {capability.value}")
            raise ForbiddenError()
        return user

    return checker
