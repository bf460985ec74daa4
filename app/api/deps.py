"""
Dépendances FastAPI partagées: garde d'authentification par rôle
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from supabase import Client
import logging

from app.core.errors import AuthenticationError, ForbiddenError
from app.core.security import decode_access_token
from app.crud import get_user_crud
from app.db import get_supabase
from app.models import UserRole

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class CurrentUser:
    """Identité attachée à la requête après vérification du jeton"""
    id: str
    role: UserRole
    username: str
    email: str
    record: Optional[Dict[str, Any]] = field(default=None, repr=False)


def require_role(role: UserRole, resolve: bool = True):
    """
    Fabrique la garde d'une famille de routes

    Args:
        role: Rôle exigé dans le jeton
        resolve: Vérifier en plus que l'identité existe encore dans son store

    Returns:
        Dépendance FastAPI renvoyant un CurrentUser

    Rejets: pas de jeton -> 401, jeton invalide ou expiré -> 401 (message
    générique), rôle différent -> 403, identité disparue -> 401.
    """
    role = UserRole(role)

    def dependency(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
        db: Client = Depends(get_supabase)
    ) -> CurrentUser:
        if credentials is None or not credentials.credentials:
            raise AuthenticationError("Access denied. No token provided.")

        try:
            claims = decode_access_token(credentials.credentials)
        except JWTError:
            raise AuthenticationError("Invalid or expired token")

        if claims.get("role") != role.value:
            raise ForbiddenError(f"Access denied. {role.value.capitalize()} only.")

        user = CurrentUser(
            id=str(claims.get("id")),
            role=role,
            username=claims.get("username", ""),
            email=claims.get("email", ""),
        )

        if resolve:
            record = get_user_crud(db, role).get_by_id(user.id)
            if not record:
                logger.warning(f"Jeton valide pour un {role.value} inexistant: {user.id}")
                raise AuthenticationError(f"{role.value.capitalize()} not found")
            user.record = record

        return user

    return dependency


require_admin = require_role(UserRole.ADMIN, resolve=False)
require_seller = require_role(UserRole.SELLER)
require_buyer = require_role(UserRole.BUYER)
