"""
Routes publiques pour les annonces immobilières (page d'accueil)
Seules les annonces approuvées sont visibles.
"""
from fastapi import APIRouter, Depends
from typing import List
from supabase import Client
import logging
from app.core.errors import APIError, NotFoundError, ServerError
from app.db import get_supabase
from app.crud import get_property_crud
from app.models import PropertyListItem, PropertyStatus
from app.services.listings import with_creators

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=List[PropertyListItem])
def list_properties(db: Client = Depends(get_supabase)):
    """Liste des annonces approuvées, les plus récentes d'abord"""
    try:
        crud = get_property_crud(db)
        return with_creators(db, crud.get_all(status=PropertyStatus.approved))
    except Exception as e:
        logger.error(f"Erreur lors de la récupération des annonces: {e}")
        raise ServerError("Error fetching properties")


@router.get("/{property_id}", response_model=PropertyListItem)
def get_property(
    property_id: str,
    db: Client = Depends(get_supabase)
):
    """Récupérer une annonce approuvée par son ID"""
    try:
        crud = get_property_crud(db)
        property_obj = crud.get_by_id(property_id, status=PropertyStatus.approved)

        if not property_obj:
            raise NotFoundError("Property not found")

        return with_creators(db, [property_obj])[0]

    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur lors de la récupération de l'annonce {property_id}: {e}")
        raise ServerError("Error fetching property")
