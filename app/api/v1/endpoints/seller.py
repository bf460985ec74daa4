"""
Routes de la surface vendeur

La garde vérifie le rôle seller puis relit le vendeur dans son store:
un jeton dont le vendeur a été supprimé est rejeté (401).
"""
from typing import List

from fastapi import APIRouter, Depends, status
from supabase import Client
import logging

from app.api.deps import CurrentUser, require_seller
from app.core.errors import APIError, NotFoundError, ServerError, ValidationFailed
from app.core.validators import APPOINTMENT_STATUSES
from app.crud import get_appointment_crud, get_property_crud, get_user_crud
from app.db import get_supabase
from app.models import (
    Appointment, AppointmentStatusUpdate, CreatorModel, MessageResponse, PasswordChange,
    ProfileUpdate, Property, PropertyDeleted, PropertyPayload, PropertyStatus,
    RecentActivity, SellerDashboardStats, UserPublic, UserRole
)
from app.services import accounts
from app.services.listings import prepare_property

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/dashboard-stats", response_model=SellerDashboardStats)
def get_dashboard_stats(
    seller: CurrentUser = Depends(require_seller),
    db: Client = Depends(get_supabase)
):
    """
    Statistiques du vendeur

    Retourne:
    - Nombre d'annonces par statut
    - Nombre de rendez-vous portant sur ses annonces
    - Les 5 annonces les plus récentes avec leur nombre de rendez-vous
    """
    try:
        properties = get_property_crud(db).get_all(
            created_by=seller.id, created_by_model=CreatorModel.seller
        )
        appointments = get_appointment_crud(db).get_all(property_ids=[p.id for p in properties])

        def count_status(value: PropertyStatus) -> int:
            return sum(1 for p in properties if p.status == value)

        recent_activity = [
            RecentActivity(
                id=p.id,
                title=p.title,
                status=p.status,
                created_at=p.created_at,
                updated_at=p.updated_at,
                appointment_count=sum(1 for a in appointments if a.property_id == p.id),
            )
            for p in properties[:5]
        ]

        return SellerDashboardStats(
            total_properties=len(properties),
            approved_properties=count_status(PropertyStatus.approved),
            pending_properties=count_status(PropertyStatus.pending),
            rejected_properties=count_status(PropertyStatus.rejected),
            total_appointments=len(appointments),
            recent_activity=recent_activity,
        )
    except Exception as e:
        logger.error(f"Erreur statistiques vendeur {seller.id}: {e}")
        raise ServerError("Server error", error=str(e))


# ==================== PROFILE ====================

@router.get("/profile", response_model=UserPublic)
def get_profile(seller: CurrentUser = Depends(require_seller)):
    return accounts.to_public(seller.record)


@router.put("/profile", response_model=UserPublic)
def update_profile(
    payload: ProfileUpdate,
    seller: CurrentUser = Depends(require_seller),
    db: Client = Depends(get_supabase)
):
    try:
        return accounts.update_own_profile(get_user_crud(db, UserRole.SELLER), seller.id, payload)
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur mise à jour profil vendeur {seller.id}: {e}")
        raise ServerError("Server error", error=str(e))


@router.put("/change-password", response_model=MessageResponse)
def change_password(
    payload: PasswordChange,
    seller: CurrentUser = Depends(require_seller),
    db: Client = Depends(get_supabase)
):
    try:
        return accounts.change_password(get_user_crud(db, UserRole.SELLER), seller.id, payload)
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur changement mot de passe vendeur {seller.id}: {e}")
        raise ServerError("Server error", error=str(e))


# ==================== PROPERTIES ====================

@router.get("/properties", response_model=List[Property])
def list_properties(
    seller: CurrentUser = Depends(require_seller),
    db: Client = Depends(get_supabase)
):
    """Annonces du vendeur, les plus récentes d'abord"""
    try:
        return get_property_crud(db).get_all(
            created_by=seller.id, created_by_model=CreatorModel.seller
        )
    except Exception as e:
        logger.error(f"Erreur récupération annonces vendeur {seller.id}: {e}")
        raise ServerError("Server error", error=str(e))


@router.get("/properties/{property_id}", response_model=Property)
def get_property(
    property_id: str,
    seller: CurrentUser = Depends(require_seller),
    db: Client = Depends(get_supabase)
):
    try:
        property_obj = get_property_crud(db).get_owned(property_id, seller.id)
        if not property_obj:
            raise NotFoundError("Property not found")
        return property_obj
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur récupération annonce {property_id} (vendeur): {e}")
        raise ServerError("Server error", error=str(e))


@router.post("/properties", response_model=Property, status_code=status.HTTP_201_CREATED)
def create_property(
    payload: PropertyPayload,
    seller: CurrentUser = Depends(require_seller),
    db: Client = Depends(get_supabase)
):
    """Créer une annonce; toujours en attente de modération"""
    try:
        data = prepare_property(payload.model_dump(exclude={"status"}))
        return get_property_crud(db).create(
            data,
            created_by=seller.id,
            created_by_model=CreatorModel.seller,
            status=PropertyStatus.pending,
        )
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur création annonce vendeur {seller.id}: {e}")
        raise ServerError("Server error", error=str(e))


@router.put("/properties/{property_id}", response_model=Property)
def update_property(
    property_id: str,
    payload: PropertyPayload,
    seller: CurrentUser = Depends(require_seller),
    db: Client = Depends(get_supabase)
):
    """
    Remplacer une annonce du vendeur

    Toute modification remet l'annonce en attente de modération,
    quel que soit le statut fourni.
    """
    try:
        data = prepare_property(payload.model_dump(exclude={"status"}))

        crud = get_property_crud(db)
        if not crud.get_owned(property_id, seller.id):
            raise NotFoundError("Property not found")

        data["status"] = PropertyStatus.pending.value
        return crud.update(property_id, data)
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur mise à jour annonce {property_id} (vendeur): {e}")
        raise ServerError("Server error", error=str(e))


@router.delete("/properties/{property_id}", response_model=PropertyDeleted)
def delete_property(
    property_id: str,
    seller: CurrentUser = Depends(require_seller),
    db: Client = Depends(get_supabase)
):
    try:
        crud = get_property_crud(db)
        property_obj = crud.get_owned(property_id, seller.id)
        if not property_obj:
            raise NotFoundError("Property not found")

        crud.delete(property_id)
        return PropertyDeleted(message="Property deleted successfully", deleted_property=property_obj)
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur suppression annonce {property_id} (vendeur): {e}")
        raise ServerError("Server error", error=str(e))


# ==================== APPOINTMENTS ====================

@router.get("/appointments", response_model=List[Appointment])
def list_appointments(
    seller: CurrentUser = Depends(require_seller),
    db: Client = Depends(get_supabase)
):
    """Rendez-vous adressés au vendeur, avec acheteur et annonce résolus"""
    try:
        crud = get_appointment_crud(db)
        return crud.populate(crud.get_all(seller_id=seller.id), buyer=True, property=True)
    except Exception as e:
        logger.error(f"Erreur récupération rendez-vous vendeur {seller.id}: {e}")
        raise ServerError("Server error", error=str(e))


@router.get("/appointments/{appointment_id}", response_model=Appointment)
def get_appointment(
    appointment_id: str,
    seller: CurrentUser = Depends(require_seller),
    db: Client = Depends(get_supabase)
):
    try:
        crud = get_appointment_crud(db)
        appointment = crud.get_by_id(appointment_id, seller_id=seller.id)
        if not appointment:
            raise NotFoundError("Appointment not found")
        return crud.populate([appointment], buyer=True, property=True)[0]
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur récupération rendez-vous {appointment_id} (vendeur): {e}")
        raise ServerError("Server error", error=str(e))


@router.put("/appointments/{appointment_id}", response_model=Appointment)
def update_appointment_status(
    appointment_id: str,
    payload: AppointmentStatusUpdate,
    seller: CurrentUser = Depends(require_seller),
    db: Client = Depends(get_supabase)
):
    """
    Changer le statut d'un rendez-vous

    Statuts disponibles: pending, accepted, rejected, completed.
    Aucune machine à états: toute transition entre ces statuts est permise
    (y compris rejected -> pending pour reconsidérer une demande).
    """
    try:
        if payload.status not in APPOINTMENT_STATUSES:
            raise ValidationFailed("Invalid status", allowed=list(APPOINTMENT_STATUSES))

        crud = get_appointment_crud(db)
        if not crud.get_by_id(appointment_id, seller_id=seller.id):
            raise NotFoundError("Appointment not found")

        updated = crud.update_status(appointment_id, payload.status)
        return crud.populate([updated], buyer=True)[0]
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur mise à jour rendez-vous {appointment_id} (vendeur): {e}")
        raise ServerError("Server error", error=str(e))
