from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import jwt
import pytest

from pizzahub.config import settings
from pizzahub.core.errors import ExpiredTokenError, InvalidTokenError, MissingTokenError, ValidationError
from pizzahub.core.security import create_access_token, hash_password, verify_password, verify_token
from pizzahub.models import RoleEnum


def make_user(**overrides):
    data = {"id": 7, "name": "Aru", "email": "aru@example.com", "role": RoleEnum.customer}
    data.update(overrides)
    return SimpleNamespace(**data)


def test_password_is_hashed_with_salt():
    first = hash_password("secret1")
    second = hash_password("secret1")

    assert first != "secret1"
    assert first != second
    assert verify_password("secret1", first)
    assert verify_password("secret1", second)
    assert not verify_password("wrong", first)


def test_malformed_hash_does_not_verify():
    assert not verify_password("secret1", "not-a-bcrypt-hash")


def test_token_round_trip_carries_identity_claims():
    token = create_access_token(make_user())
    claims = verify_token(token)

    assert claims.user_id == 7
    assert claims.name == "Aru"
    assert claims.email == "aru@example.com"
    assert claims.role == "customer"
    assert claims.expires_at - claims.issued_at == timedelta(hours=settings.TOKEN_TTL_HOURS)


def test_missing_token():
    with pytest.raises(MissingTokenError):
        verify_token(None)
    with pytest.raises(MissingTokenError):
        verify_token("")


def test_expired_token():
    issued = datetime.now(timezone.utc) - timedelta(hours=settings.TOKEN_TTL_HOURS + 1)
    token = create_access_token(make_user(), now=issued)

    with pytest.raises(ExpiredTokenError):
        verify_token(token)


def test_tampered_token():
    header, _, signature = create_access_token(make_user()).split(".")
    _, admin_payload, _ = create_access_token(make_user(id=1, role=RoleEnum.admin)).split(".")
    tampered = ".".join([header, admin_payload, signature])

    with pytest.raises(InvalidTokenError):
        verify_token(tampered)


def test_token_signed_with_other_secret():
    now = datetime.now(timezone.utc)
    forged = jwt.encode(
        {"sub": "1", "name": "Admin", "email": settings.ADMIN_EMAIL, "role": "admin",
         "iat": now, "exp": now + timedelta(hours=1)},
        "some-other-secret",
        algorithm="HS256",
    )

    with pytest.raises(InvalidTokenError):
        verify_token(forged)


def test_password_longer_than_bcrypt_limit():
    password = "пароль" * 10  # 60 символов, 120 байт

    with pytest.raises(ValidationError):
        hash_password(password)

    assert not verify_password(password, hash_password("secret1"))
