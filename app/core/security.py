"""
Hachage des mots de passe et jetons d'accès (JWT)
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import bcrypt
from jose import jwt

from app.core.config import settings


# bcrypt ne considère que les 72 premiers octets
BCRYPT_MAX_BYTES = 72


def _secret(password: str) -> bytes:
    return password.encode()[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_secret(password), salt).decode()


def verify_password(password: str, hashed: str) -> bool:
    if not password or not hashed:
        return False
    return bcrypt.checkpw(_secret(password), hashed.encode())


def create_access_token(user: Dict[str, Any]) -> str:
    """
    Émettre un jeton signé pour une identité

    Args:
        user: Enregistrement de l'identité (id, role, username, email)

    Returns:
        JWT signé, valable JWT_EXPIRE_HOURS heures
    """
    now = datetime.now(timezone.utc)
    claims = {
        "id": str(user["id"]),
        "role": user["role"],
        "username": user["username"],
        "email": user["email"],
        "iat": now,
        "exp": now + timedelta(hours=settings.JWT_EXPIRE_HOURS),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Vérifier signature et expiration; lève jose.JWTError sinon"""
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
