"""
Règles de validation partagées par les routes

Les règles travaillent sur des dictionnaires snake_case (model_dump des
schémas d'entrée); les noms de champs renvoyés au client sont en camelCase.
"""
import re
from typing import Any, Dict, Iterable, List, Optional

from pydantic.alias_generators import to_camel

from app.core.errors import ValidationFailed

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$", re.ASCII)

# Trois motifs distincts, chacun conservé à son point d'appel:
# inscription / mise à jour admin, profil en libre-service, création admin.
REGISTRATION_PHONE_PATTERN = re.compile(r"^\+?[\d\s()-]{10,}$", re.ASCII)
PROFILE_PHONE_PATTERN = re.compile(r"^\+?[\d\s-]{10,}$", re.ASCII)
ADMIN_PHONE_PATTERN = re.compile(r"^[0-9]{10}$", re.ASCII)

ROLES = ("buyer", "seller", "admin")
PROPERTY_TYPES = ("house", "land", "apartment")
PROPERTY_STATUSES = ("approved", "pending", "rejected")
APPOINTMENT_STATUSES = ("pending", "accepted", "rejected", "completed")
INTEREST_ACTIONS = ("mark", "unmark")

PROPERTY_COMMON_FIELDS = ("title", "property_type", "price", "address", "image_url")
PROPERTY_TYPE_FIELDS = {
    "house": ("beds", "baths", "sqft"),
    "land": ("land_area", "zoning"),
    "apartment": ("floor_number", "total_floors"),
}


def is_blank(value: Any) -> bool:
    """Absent au sens du contrôle de présence: None, chaîne vide, 0"""
    if isinstance(value, str):
        return not value.strip()
    return not value


def missing_fields(data: Dict[str, Any], fields: Iterable[str]) -> List[str]:
    """Noms (camelCase) des champs obligatoires absents"""
    return [to_camel(field) for field in fields if is_blank(data.get(field))]


def _length_between(value: Optional[str], low: int, high: int) -> bool:
    return isinstance(value, str) and low <= len(value.strip()) <= high


def _matches(pattern: re.Pattern, value: Optional[str]) -> bool:
    return isinstance(value, str) and bool(pattern.match(value))


def validate_registration(data: Dict[str, Any]) -> List[str]:
    """
    Valider une demande d'inscription

    Toutes les règles sont évaluées; la liste complète des violations est
    renvoyée (vide si la demande est valide).
    """
    errors = []

    if not _length_between(data.get("name"), 2, 50):
        errors.append("Name must be between 2 and 50 characters")

    if not _length_between(data.get("username"), 3, 30):
        errors.append("Username must be between 3 and 30 characters")

    if not _matches(EMAIL_PATTERN, data.get("email")):
        errors.append("Valid email is required")

    password = data.get("password")
    if not password or len(password) < 6:
        errors.append("Password must be at least 6 characters")

    role = data.get("role")
    if role not in ROLES:
        errors.append("Invalid role specified")

    if role in ("buyer", "seller"):
        if not _matches(REGISTRATION_PHONE_PATTERN, data.get("phone_number")):
            errors.append("Valid phone number is required for buyers and sellers")

    return errors


def validate_signin(data: Dict[str, Any]) -> List[str]:
    errors = []

    if not _matches(EMAIL_PATTERN, data.get("email")):
        errors.append("Valid email is required")

    password = data.get("password")
    if not password or len(password) < 6:
        errors.append("Password must be at least 6 characters")

    if data.get("role") not in ROLES:
        errors.append("Invalid role specified")

    return errors


def validate_identity_update(data: Dict[str, Any]) -> List[str]:
    """Règles d'inscription appliquées aux seuls champs fournis"""
    errors = []

    if "name" in data and not _length_between(data["name"], 2, 50):
        errors.append("Name must be between 2 and 50 characters")
    if "username" in data and not _length_between(data["username"], 3, 30):
        errors.append("Username must be between 3 and 30 characters")
    if "email" in data and not _matches(EMAIL_PATTERN, data["email"]):
        errors.append("Please enter a valid email")
    if "password" in data and (not data["password"] or len(data["password"]) < 6):
        errors.append("Password must be at least 6 characters")
    if "phone_number" in data and not _matches(REGISTRATION_PHONE_PATTERN, data["phone_number"]):
        errors.append("Please enter a valid phone number")

    return errors


def is_admin_phone(value: Optional[str]) -> bool:
    return _matches(ADMIN_PHONE_PATTERN, value)


def is_profile_phone(value: Optional[str]) -> bool:
    return _matches(PROFILE_PHONE_PATTERN, value)


def check_property_fields(data: Dict[str, Any]) -> None:
    """
    Vérifier les champs d'une annonce (communs puis dépendants du type)

    Args:
        data: Annonce complète en snake_case

    Raises:
        ValidationFailed: à la première catégorie de règles violée
    """
    missing = missing_fields(data, PROPERTY_COMMON_FIELDS)
    if missing:
        raise ValidationFailed("Missing required fields", fields=missing)

    property_type = data["property_type"]
    if property_type not in PROPERTY_TYPE_FIELDS:
        raise ValidationFailed("Invalid property type", allowed=list(PROPERTY_TYPES))

    required = PROPERTY_TYPE_FIELDS[property_type]
    if missing_fields(data, required):
        raise ValidationFailed(
            f"Missing required fields for {property_type} property",
            required=[to_camel(field) for field in required],
        )

    # Une clé status présente doit porter une valeur connue (null compris)
    if "status" in data and data["status"] not in PROPERTY_STATUSES:
        raise ValidationFailed("Invalid status value", allowed=list(PROPERTY_STATUSES))


def clear_unrelated_type_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    """Remettre à None les champs propres aux autres types de bien"""
    cleaned = dict(data)
    for property_type, fields in PROPERTY_TYPE_FIELDS.items():
        if property_type == cleaned.get("property_type"):
            continue
        for field in fields:
            cleaned[field] = None
    return cleaned
