"""
Annonces: préparation des écritures et résolution des créateurs
"""
from typing import Any, Dict, List, Optional
from supabase import Client

from app.core.validators import check_property_fields, clear_unrelated_type_fields
from app.crud import get_user_crud
from app.models import (
    CreatorModel, Property, PropertyListItem, PropertyPayload, UserRole, UserSummary
)

PAYLOAD_FIELDS = set(PropertyPayload.model_fields)

CREATOR_ROLES = {
    CreatorModel.seller: UserRole.SELLER,
    CreatorModel.admin: UserRole.ADMIN,
}


def prepare_property(data: Dict[str, Any], existing: Optional[Property] = None) -> Dict[str, Any]:
    """
    Valider puis normaliser une annonce avant écriture

    Args:
        data: Champs fournis (snake_case)
        existing: Annonce stockée; les champs fournis lui sont superposés

    Returns:
        Champs à écrire, ceux des autres types de bien remis à None

    Raises:
        ValidationFailed: champ commun ou propre au type manquant, type ou statut inconnu
    """
    if existing is not None:
        merged = existing.model_dump(mode="json", include=PAYLOAD_FIELDS)
        merged.update(data)
        data = merged

    check_property_fields(data)
    return clear_unrelated_type_fields(data)


def resolve_creators(db: Client, properties: List[Property]) -> Dict[str, UserSummary]:
    """Créateurs des annonces indexés par created_by, un appel par store"""
    creators = {}
    for model, role in CREATOR_ROLES.items():
        ids = [p.created_by for p in properties if p.created_by_model == model]
        if not ids:
            continue
        for record in get_user_crud(db, role).get_by_ids(ids):
            creators[str(record["id"])] = UserSummary(**record)
    return creators


def resolve_creator(db: Client, prop: Property) -> Optional[UserSummary]:
    return resolve_creators(db, [prop]).get(prop.created_by)


def with_creators(db: Client, properties: List[Property]) -> List[PropertyListItem]:
    creators = resolve_creators(db, properties)
    return [
        PropertyListItem(**p.model_dump(), creator=creators.get(p.created_by))
        for p in properties
    ]
