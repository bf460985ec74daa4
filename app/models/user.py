# app/models/user.py
from pydantic import field_validator
from typing import Optional, List
from datetime import datetime
from enum import Enum

from .base import CamelModel


class UserRole(str, Enum):
    """Rôles utilisateurs (un store par rôle)"""
    BUYER = "buyer"
    SELLER = "seller"
    ADMIN = "admin"


# Entrées: tous les champs sont optionnels, la présence est vérifiée
# par app.core.validators pour renvoyer toutes les erreurs d'un coup
class RegisterRequest(CamelModel):
    name: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    phone_number: Optional[str] = None
    role: Optional[str] = None


class SigninRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


# Création / mise à jour par un admin
class UserCreate(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    phone_number: Optional[str] = None


class UserUpdate(CamelModel):
    """Mise à jour partielle; `role` est accepté puis ignoré"""
    name: Optional[str] = None
    email: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    phone_number: Optional[str] = None
    role: Optional[str] = None


# Profil en libre-service
class ProfileUpdate(CamelModel):
    name: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None


class PasswordChange(CamelModel):
    current_password: Optional[str] = None
    new_password: Optional[str] = None


# Sorties (jamais de hash de mot de passe)
class UserSummary(CamelModel):
    """Référence résolue vers une identité"""
    id: str
    name: str
    email: str
    phone_number: Optional[str] = None


class UserPublic(CamelModel):
    id: str
    name: str
    username: str
    email: str
    phone_number: Optional[str] = None
    role: UserRole
    created_at: datetime

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v):
        return str(v)


class AuthResponse(UserPublic):
    token: str


class UserPage(CamelModel):
    data: List[UserPublic]
    current_page: int
    total_pages: int
    total_items: int
