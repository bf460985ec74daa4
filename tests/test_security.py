"""
Tests du hachage et des jetons
Exécuter: pytest tests/test_security.py -v
"""
from datetime import datetime, timedelta, timezone

import pytest
from jose import JWTError, jwt

from app.core.config import settings
from app.core.security import (
    create_access_token, decode_access_token, hash_password, verify_password
)

USER = {
    "id": "0b6c3c1e-2f7e-4c83-8d57-3a1d6ad2b001",
    "role": "seller",
    "username": "sam",
    "email": "sam@example.com",
}


def test_password_hash_roundtrip():
    hashed = hash_password("secret123")

    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong-password", hashed)


def test_verify_password_without_hash():
    assert not verify_password("secret123", None)
    assert not verify_password("", hash_password("secret123"))


def test_token_carries_identity_claims():
    claims = decode_access_token(create_access_token(USER))

    assert claims["id"] == USER["id"]
    assert claims["role"] == "seller"
    assert claims["username"] == "sam"
    assert claims["email"] == "sam@example.com"
    assert claims["exp"] - claims["iat"] == settings.JWT_EXPIRE_HOURS * 3600


def test_token_with_other_secret_is_rejected():
    forged = jwt.encode(USER, "another-secret", algorithm="HS256")
    with pytest.raises(JWTError):
        decode_access_token(forged)


def test_expired_token_is_rejected():
    past = datetime.now(timezone.utc) - timedelta(hours=25)
    expired = jwt.encode(
        {**USER, "iat": past, "exp": past + timedelta(hours=1)},
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )
    with pytest.raises(JWTError):
        decode_access_token(expired)


def test_password_longer_than_bcrypt_limit():
    """Au-delà de 72 octets, seul le début du mot de passe compte"""
    hashed = hash_password("é" * 50)

    assert verify_password("é" * 50, hashed)
    assert verify_password("é" * 36 + "suffixe ignoré", hashed)
    assert not verify_password("e" * 50, hashed)
