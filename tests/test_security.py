# tests/test_security.py
from datetime import timedelta

import pytest
from jose import JWTError, jwt

from tourit.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from tourit.core.settings import settings


def test_password_round_trip() -> None:
    hashed = hash_password("secret1")

    assert hashed != "secret1"
    assert verify_password("secret1", hashed)
    assert not verify_password("secret2", hashed)


def test_cleared_hash_never_verifies() -> None:
    assert not verify_password("secret1", "")
    assert not verify_password("secret1", None)


def test_long_passwords_are_truncated_consistently() -> None:
    long_password = "p" * 100
    hashed = hash_password(long_password)

    assert verify_password(long_password, hashed)
    assert verify_password("p" * 72, hashed)


def test_empty_password_rejected() -> None:
    with pytest.raises(ValueError):
        hash_password("")


def test_token_claims() -> None:
    token = create_access_token(7, "alice", "alice@example.com")

    claims = decode_access_token(token)

    assert claims["sub"] == "7"
    assert claims["unique_name"] == "alice"
    assert claims["email"] == "alice@example.com"
    assert claims["iss"] == settings.jwt_issuer
    assert claims["aud"] == settings.jwt_audience
    assert claims["exp"] - claims["iat"] == settings.access_token_expire_minutes * 60


def test_tokens_have_unique_ids() -> None:
    first = decode_access_token(create_access_token(7, "alice", "alice@example.com"))
    second = decode_access_token(create_access_token(7, "alice", "alice@example.com"))

    assert first["jti"] != second["jti"]


def test_expired_token_rejected() -> None:
    token = create_access_token(7, "alice", "alice@example.com", expires_delta=timedelta(seconds=-10))

    with pytest.raises(JWTError):
        decode_access_token(token)


def test_wrong_issuer_rejected() -> None:
    token = jwt.encode(
        {"sub": "7", "iss": "somebody-else", "aud": settings.jwt_audience},
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )

    with pytest.raises(JWTError):
        decode_access_token(token)


def test_wrong_key_rejected() -> None:
    token = jwt.encode(
        {"sub": "7", "iss": settings.jwt_issuer, "aud": settings.jwt_audience},
        "not-the-secret",
        algorithm=settings.jwt_algorithm,
    )

    with pytest.raises(JWTError):
        decode_access_token(token)
