"""
Comptes: inscription, connexion, profils et mots de passe

Logique commune aux surfaces admin, vendeur et acheteur. Les fonctions
lèvent des APIError; les endpoints les laissent remonter telles quelles.
"""
from typing import Any, Dict, Type
from supabase import Client
import logging

from app.core.errors import (
    APIError, AuthenticationError, ConflictError, NotFoundError, ValidationFailed
)
from app.core.security import create_access_token, verify_password
from app.core.validators import (
    EMAIL_PATTERN,
    is_admin_phone,
    is_blank,
    is_profile_phone,
    missing_fields,
    validate_identity_update,
    validate_registration,
    validate_signin,
)
from app.crud import UserCRUD, get_user_crud
from app.models import (
    AuthResponse, MessageResponse, PasswordChange, ProfileUpdate,
    RegisterRequest, SigninRequest, UserCreate, UserPublic, UserRole, UserUpdate
)

logger = logging.getLogger(__name__)


def _label(crud: UserCRUD) -> str:
    return crud.role.value.capitalize()


def to_public(record: Dict[str, Any]) -> UserPublic:
    return UserPublic(**record)


def _auth_response(record: Dict[str, Any]) -> AuthResponse:
    return AuthResponse(**record, token=create_access_token(record))


def register(db: Client, payload: RegisterRequest) -> AuthResponse:
    """
    Inscrire une identité dans le store de son rôle

    Raises:
        ValidationFailed: règles de forme (liste complète) ou email/username déjà pris
    """
    data = payload.model_dump()
    errors = validate_registration(data)
    if errors:
        raise ValidationFailed("Validation error", details=errors)

    crud = get_user_crud(db, UserRole(data["role"]))
    if crud.find_conflict(email=data["email"], username=data["username"]):
        raise ValidationFailed("User with this email or username already exists")

    record = crud.create({
        "name": data["name"],
        "username": data["username"],
        "email": data["email"],
        "password": data["password"],
        "phone_number": data["phone_number"],
    })
    logger.info(f"Inscription {crud.role.value}: {record['id']}")
    return _auth_response(record)


def signin(db: Client, payload: SigninRequest) -> AuthResponse:
    """Connexion par email + rôle; message volontairement vague si l'un des deux est faux"""
    data = payload.model_dump()
    errors = validate_signin(data)
    if errors:
        raise ValidationFailed("Validation error", details=errors)

    crud = get_user_crud(db, UserRole(data["role"]))
    record = crud.get_by_email(data["email"])
    if not record:
        raise AuthenticationError("Invalid email or role")

    if not verify_password(data["password"], record.get("password_hash")):
        raise AuthenticationError("Invalid password")

    return _auth_response(record)


def _check_names(data: Dict[str, Any]) -> None:
    """Longueurs de name (2-50) et username (3-30) quand ils sont fournis"""
    errors = validate_identity_update(
        {key: data[key] for key in ("name", "username") if key in data}
    )
    if errors:
        raise ValidationFailed("Validation error", errors=errors)


def get_profile(crud: UserCRUD, user_id: str) -> UserPublic:
    record = crud.get_by_id(user_id)
    if not record:
        raise NotFoundError(f"{_label(crud)} not found")
    return to_public(record)


def update_own_profile(crud: UserCRUD, user_id: str, payload: ProfileUpdate) -> UserPublic:
    """
    Profil vendeur / acheteur: name, email et phoneNumber obligatoires,
    username optionnel
    """
    data = payload.model_dump(exclude_none=True)

    if missing_fields(data, ("name", "email", "phone_number")):
        raise ValidationFailed("Name, email and phone number are required")

    if not is_profile_phone(data["phone_number"]):
        raise ValidationFailed("Invalid phone number format")

    if not EMAIL_PATTERN.match(data["email"]):
        raise ValidationFailed("Valid email is required")

    if "username" in data and is_blank(data["username"]):
        data.pop("username")

    _check_names(data)

    conflict = crud.find_conflict(
        email=data["email"], username=data.get("username"), exclude_id=user_id
    )
    if conflict:
        raise ValidationFailed(f"{conflict.capitalize()} is already taken")

    return to_public(crud.update(user_id, data))


def update_admin_profile(crud: UserCRUD, user_id: str, payload: ProfileUpdate) -> UserPublic:
    """Profil admin: name, username, email optionnels, inchangés si absents"""
    record = crud.get_by_id(user_id)
    if not record:
        raise NotFoundError("Admin not found")

    data = {
        key: value
        for key, value in payload.model_dump(include={"name", "username", "email"}).items()
        if not is_blank(value)
    }

    if "email" in data and not EMAIL_PATTERN.match(data["email"]):
        raise ValidationFailed("Valid email is required")

    _check_names(data)

    conflict = crud.find_conflict(
        email=data.get("email"), username=data.get("username"), exclude_id=user_id
    )
    if conflict:
        raise ValidationFailed(f"{conflict.capitalize()} is already taken")

    return to_public(crud.update(user_id, data))


def change_password(
    crud: UserCRUD,
    user_id: str,
    payload: PasswordChange,
    mismatch_error: Type[APIError] = AuthenticationError
) -> MessageResponse:
    """
    Changer son mot de passe après vérification de l'actuel

    Args:
        mismatch_error: erreur levée si le mot de passe actuel est faux
            (401 pour vendeur / acheteur, 400 pour admin)
    """
    if not payload.current_password or not payload.new_password:
        raise ValidationFailed("Current password and new password are required")

    if len(payload.new_password) < 6:
        raise ValidationFailed("New password must be at least 6 characters long")

    record = crud.get_by_id(user_id)
    if not record:
        raise NotFoundError(f"{_label(crud)} not found")

    if not verify_password(payload.current_password, record.get("password_hash")):
        raise mismatch_error("Current password is incorrect")

    crud.update(user_id, {"password": payload.new_password})
    logger.info(f"Mot de passe changé pour {crud.role.value} {user_id}")
    return MessageResponse(message="Password updated successfully")


def create_identity(crud: UserCRUD, payload: UserCreate) -> UserPublic:
    """
    Création d'un acheteur / vendeur par un admin

    Ordre des contrôles: champs manquants, téléphone à 10 chiffres,
    règles d'inscription, puis collision (409).
    """
    data = payload.model_dump()

    missing = missing_fields(data, ("name", "email", "username", "password", "phone_number"))
    if missing:
        raise ValidationFailed("Missing required fields", fields=missing)

    if not is_admin_phone(data["phone_number"]):
        raise ValidationFailed("Validation error", errors=["Please enter a valid 10-digit phone number"])

    errors = validate_identity_update(data)
    if errors:
        raise ValidationFailed("Validation error", errors=errors)

    conflict = crud.find_conflict(email=data["email"], username=data["username"])
    if conflict:
        raise ConflictError(f"{_label(crud)} with this {conflict} already exists")

    return to_public(crud.create(data))


def update_identity(crud: UserCRUD, user_id: str, payload: UserUpdate) -> UserPublic:
    """Mise à jour partielle par un admin; le rôle est ignoré"""
    record = crud.get_by_id(user_id)
    if not record:
        raise NotFoundError(f"{_label(crud)} not found")

    data = payload.model_dump(exclude_unset=True, exclude_none=True)
    data.pop("role", None)

    errors = validate_identity_update(data)
    if errors:
        raise ValidationFailed("Validation error", errors=errors)

    email = data.get("email", "").strip().lower()
    if email and email != record["email"] and crud.get_by_email(email):
        raise ConflictError(f"Email already in use by another {crud.role.value}")

    username = data.get("username", "").strip().lower()
    if username and username != record["username"] and crud.get_by_username(username):
        raise ConflictError(f"Username already in use by another {crud.role.value}")

    return to_public(crud.update(user_id, data))
