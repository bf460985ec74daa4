"""
Routes de la surface acheteur
"""
from typing import List

from fastapi import APIRouter, Depends, status
from supabase import Client
import logging

from app.api.deps import CurrentUser, require_buyer
from app.core.errors import APIError, NotFoundError, ServerError, ValidationFailed
from app.core.validators import INTEREST_ACTIONS, missing_fields
from app.crud import get_appointment_crud, get_property_crud, get_user_crud
from app.db import get_supabase
from app.models import (
    Appointment, AppointmentCreate, AppointmentStatus, InterestRequest, MessageResponse,
    PasswordChange, ProfileUpdate, PropertyDetail, PropertyListItem, PropertyStatus,
    UserPublic, UserRole, UserSummary
)
from app.services import accounts
from app.services.listings import resolve_creator, with_creators

router = APIRouter()
logger = logging.getLogger(__name__)


# ==================== PROFILE ====================

@router.get("/profile", response_model=UserPublic)
def get_profile(buyer: CurrentUser = Depends(require_buyer)):
    return accounts.to_public(buyer.record)


@router.put("/profile", response_model=UserPublic)
def update_profile(
    payload: ProfileUpdate,
    buyer: CurrentUser = Depends(require_buyer),
    db: Client = Depends(get_supabase)
):
    try:
        return accounts.update_own_profile(get_user_crud(db, UserRole.BUYER), buyer.id, payload)
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur mise à jour profil acheteur {buyer.id}: {e}")
        raise ServerError("Server error", error=str(e))


@router.put("/change-password", response_model=MessageResponse)
def change_password(
    payload: PasswordChange,
    buyer: CurrentUser = Depends(require_buyer),
    db: Client = Depends(get_supabase)
):
    try:
        return accounts.change_password(get_user_crud(db, UserRole.BUYER), buyer.id, payload)
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur changement mot de passe acheteur {buyer.id}: {e}")
        raise ServerError("Server error", error=str(e))


# ==================== PROPERTIES ====================

@router.get("/properties", response_model=List[PropertyListItem])
def list_properties(
    buyer: CurrentUser = Depends(require_buyer),
    db: Client = Depends(get_supabase)
):
    """Annonces approuvées uniquement"""
    try:
        crud = get_property_crud(db)
        return with_creators(db, crud.get_all(status=PropertyStatus.approved))
    except Exception as e:
        logger.error(f"Erreur récupération annonces (acheteur): {e}")
        raise ServerError("Error fetching properties")


@router.get("/properties/{property_id}", response_model=PropertyDetail)
def get_property(
    property_id: str,
    buyer: CurrentUser = Depends(require_buyer),
    db: Client = Depends(get_supabase)
):
    """
    Détail d'une annonce approuvée

    Retourne l'annonce, son créateur (vendeur ou admin), l'acheteur courant
    et s'il a marqué l'annonce comme intéressante.
    """
    try:
        property_obj = get_property_crud(db).get_by_id(property_id, status=PropertyStatus.approved)
        if not property_obj:
            raise NotFoundError("Property not found")

        return PropertyDetail(
            property=property_obj,
            creator=resolve_creator(db, property_obj),
            buyer=UserSummary(**buyer.record),
            is_interested=buyer.id in property_obj.interested,
        )
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur détail annonce {property_id} (acheteur): {e}")
        raise ServerError("Error fetching property details", error=str(e))


@router.post("/properties/{property_id}/interested", response_model=MessageResponse)
def toggle_interest(
    property_id: str,
    payload: InterestRequest,
    buyer: CurrentUser = Depends(require_buyer),
    db: Client = Depends(get_supabase)
):
    """
    Marquer / démarquer une annonce

    - **action**: mark ou unmark; les deux opérations sont idempotentes
    """
    try:
        crud = get_property_crud(db)
        if not crud.get_by_id(property_id):
            raise NotFoundError("Property not found")

        if payload.action not in INTEREST_ACTIONS:
            raise ValidationFailed('Invalid action. Must be either "mark" or "unmark"')

        if payload.action == "unmark":
            crud.remove_interest(property_id, buyer.id)
            return MessageResponse(message="Property unmarked as interested successfully")

        crud.add_interest(property_id, buyer.id)
        return MessageResponse(message="Property marked as interested successfully")
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur intérêt annonce {property_id}: {e}")
        raise ServerError("Error updating property interest", error=str(e))


# ==================== APPOINTMENTS ====================

@router.get("/appointments", response_model=List[Appointment])
def list_appointments(
    buyer: CurrentUser = Depends(require_buyer),
    db: Client = Depends(get_supabase)
):
    try:
        crud = get_appointment_crud(db)
        return crud.populate(crud.get_all(buyer_id=buyer.id), seller=True, property=True)
    except Exception as e:
        logger.error(f"Erreur récupération rendez-vous acheteur {buyer.id}: {e}")
        raise ServerError("Server error", error=str(e))


@router.get("/appointments/{appointment_id}", response_model=Appointment)
def get_appointment(
    appointment_id: str,
    buyer: CurrentUser = Depends(require_buyer),
    db: Client = Depends(get_supabase)
):
    try:
        crud = get_appointment_crud(db)
        appointment = crud.get_by_id(appointment_id, buyer_id=buyer.id)
        if not appointment:
            raise NotFoundError("Appointment not found")
        return crud.populate([appointment], seller=True, property=True)[0]
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur récupération rendez-vous {appointment_id} (acheteur): {e}")
        raise ServerError("Server error", error=str(e))


@router.post("/appointments", response_model=Appointment, status_code=status.HTTP_201_CREATED)
def create_appointment(
    payload: AppointmentCreate,
    buyer: CurrentUser = Depends(require_buyer),
    db: Client = Depends(get_supabase)
):
    """
    Demander une visite

    L'annonce et le vendeur doivent exister; le rendez-vous démarre
    toujours au statut pending.
    """
    try:
        data = payload.model_dump()
        if missing_fields(data, ("property_id", "seller_id", "place_to_visit", "message")) or data["date"] is None:
            raise ValidationFailed(
                "Property ID, seller details, date, place to visit and message are required"
            )

        if not get_property_crud(db).get_by_id(data["property_id"]):
            raise NotFoundError("Property not found")

        if not get_user_crud(db, UserRole.SELLER).get_by_id(data["seller_id"]):
            raise NotFoundError("Seller not found")

        crud = get_appointment_crud(db)
        appointment = crud.create({**data, "buyer_id": buyer.id})
        return crud.populate([appointment], seller=True, property=True)[0]
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur création rendez-vous acheteur {buyer.id}: {e}")
        raise ServerError("Server error", error=str(e))


@router.delete("/appointments/{appointment_id}", response_model=MessageResponse)
def cancel_appointment(
    appointment_id: str,
    buyer: CurrentUser = Depends(require_buyer),
    db: Client = Depends(get_supabase)
):
    """
    Annuler une demande de visite

    Seul un rendez-vous encore pending peut être annulé; sinon la réponse
    est la même que pour un rendez-vous inexistant (404).
    """
    try:
        crud = get_appointment_crud(db)
        appointment = crud.get_by_id(
            appointment_id, buyer_id=buyer.id, status=AppointmentStatus.pending
        )
        if not appointment:
            raise NotFoundError("Appointment not found or cannot be cancelled")

        crud.delete(appointment_id)
        return MessageResponse(message="Appointment cancelled successfully")
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur annulation rendez-vous {appointment_id}: {e}")
        raise ServerError("Server error", error=str(e))
