import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt

from pizzahub.config import settings
from pizzahub.core.errors import ExpiredTokenError, InvalidTokenError, MissingTokenError, ValidationError

logger = logging.getLogger(__name__)

# bcrypt принимает пароль не длиннее 72 байт
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """
    Солёный bcrypt-хеш пароля. Соль хранится внутри самого хеша.
    """
    raw = password.encode("utf-8")
    if len(raw) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(raw, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    raw = password.encode("utf-8")
    if len(raw) > MAX_PASSWORD_BYTES:
        # такой пароль не мог быть захеширован
        return False

    # checkpw пересчитывает хеш и сравнивает за постоянное время
    try:
        return bcrypt.checkpw(raw, password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    name: str
    email: str
    role: str
    issued_at: datetime
    expires_at: datetime


def create_access_token(user, now: Optional[datetime] = None) -> str:
    """
    Подписанный токен с id, именем, email и ролью пользователя.
    Срок жизни фиксированный: TOKEN_TTL_HOURS от момента выдачи.
    """
    now = now or datetime.now(timezone.utc)
    role = user.role.value if hasattr(user.role, "value") else str(user.role)
    payload = {
        "sub": str(user.id),
        "name": user.name,
        "email": user.email,
        "role": role,
        "iat": now,
        "exp": now + timedelta(hours=settings.TOKEN_TTL_HOURS),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: Optional[str]) -> TokenClaims:
    if not token:
        raise MissingTokenError()

    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["sub", "exp", "iat"]},
        )
    except jwt.ExpiredSignatureError:
        raise ExpiredTokenError()
    except jwt.InvalidTokenError as e:
        logger.warning(f"Token rejected: {e}")
        raise InvalidTokenError()

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise InvalidTokenError()

    return TokenClaims(
        user_id=user_id,
        name=payload.get("name", ""),
        email=payload.get("email", ""),
        role=payload.get("role", "customer"),
        issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )
