"""
Routes de la surface admin
Toutes les routes exigent un jeton de rôle admin (garde posée dans api.py).
"""
import math
from typing import List

from fastapi import APIRouter, Depends, Query, status
from supabase import Client
import logging

from app.api.deps import CurrentUser, require_admin
from app.core.errors import APIError, NotFoundError, ServerError, ValidationFailed
from app.core.validators import PROPERTY_STATUSES
from app.crud import UserCRUD, get_property_crud, get_user_crud
from app.db import get_supabase
from app.models import (
    AdminDashboard, CreatorModel, MessageResponse, PasswordChange, ProfileUpdate,
    Property, PropertyListItem, PropertyPayload, PropertyStatus, PropertyStatusUpdate,
    RecentProperty, RecentUser, SellerPage, SellerProperties, SellerWithProperties,
    UserCreate, UserPage, UserPublic, UserRole, UserSummary, UserUpdate
)
from app.services import accounts
from app.services.listings import prepare_property, with_creators

router = APIRouter()
logger = logging.getLogger(__name__)


def _page_params(page: int, limit: int):
    return (page if page >= 1 else 1), (limit if limit >= 1 else 10)


def _fetch_page(crud: UserCRUD, page: int, limit: int, search: str, sort_by: str, sort_order: str):
    page, limit = _page_params(page, limit)
    rows, total = crud.get_page(
        page=page,
        limit=limit,
        search=search,
        sort_by=sort_by,
        descending=sort_order == "desc",
    )
    return rows, total, page, math.ceil(total / limit)


def _seller_properties(db: Client, seller_id: str) -> List[Property]:
    return get_property_crud(db).get_all(created_by=seller_id, created_by_model=CreatorModel.seller)


# ==================== DASHBOARD ====================

@router.get("/dashboard", response_model=AdminDashboard)
def get_dashboard(db: Client = Depends(get_supabase)):
    """
    Statistiques globales

    Retourne:
    - Nombre total d'annonces
    - Nombre total d'identités (acheteurs + vendeurs)
    - Les 5 annonces les plus récentes
    - Les 5 identités les plus récentes, tous stores confondus
    """
    try:
        properties = get_property_crud(db)
        buyers = get_user_crud(db, UserRole.BUYER)
        sellers = get_user_crud(db, UserRole.SELLER)

        recent_users = [
            RecentUser(**record)
            for record in buyers.get_recent(5) + sellers.get_recent(5)
        ]
        recent_users.sort(key=lambda user: user.created_at, reverse=True)

        return AdminDashboard(
            total_properties=properties.count(),
            total_users=buyers.count() + sellers.count(),
            recent_properties=[RecentProperty(**p.model_dump()) for p in properties.get_all(limit=5)],
            recent_users=recent_users[:5],
        )
    except Exception as e:
        logger.error(f"Erreur calcul statistiques admin: {e}")
        raise ServerError("Error fetching dashboard statistics")


# ==================== PROFILE ====================

@router.get("/profile", response_model=UserPublic)
def get_profile(
    admin: CurrentUser = Depends(require_admin),
    db: Client = Depends(get_supabase)
):
    try:
        return accounts.get_profile(get_user_crud(db, UserRole.ADMIN), admin.id)
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur récupération profil admin: {e}")
        raise ServerError("Server error while fetching profile.")


@router.put("/profile", response_model=UserPublic)
def update_profile(
    payload: ProfileUpdate,
    admin: CurrentUser = Depends(require_admin),
    db: Client = Depends(get_supabase)
):
    """Mettre à jour name / username / email (unicité revérifiée)"""
    try:
        return accounts.update_admin_profile(get_user_crud(db, UserRole.ADMIN), admin.id, payload)
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur mise à jour profil admin: {e}")
        raise ServerError("Server error while updating profile.")


@router.put("/change-password", response_model=MessageResponse)
def change_password(
    payload: PasswordChange,
    admin: CurrentUser = Depends(require_admin),
    db: Client = Depends(get_supabase)
):
    try:
        return accounts.change_password(
            get_user_crud(db, UserRole.ADMIN), admin.id, payload, mismatch_error=ValidationFailed
        )
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur changement mot de passe admin: {e}")
        raise ServerError("Server error while updating password")


# ==================== PROPERTIES ====================

@router.get("/properties", response_model=List[PropertyListItem])
def list_properties(db: Client = Depends(get_supabase)):
    """Toutes les annonces, quel que soit leur créateur ou statut"""
    try:
        return with_creators(db, get_property_crud(db).get_all())
    except Exception as e:
        logger.error(f"Erreur récupération annonces (admin): {e}")
        raise ServerError("Error fetching properties")


@router.post("/properties", response_model=Property, status_code=status.HTTP_201_CREATED)
def create_property(
    payload: PropertyPayload,
    admin: CurrentUser = Depends(require_admin),
    db: Client = Depends(get_supabase)
):
    """Créer une annonce; toujours approuvée, le statut fourni est ignoré"""
    try:
        data = payload.model_dump(exclude={"status"})
        return get_property_crud(db).create(
            prepare_property(data),
            created_by=admin.id,
            created_by_model=CreatorModel.admin,
            status=PropertyStatus.approved,
        )
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur création annonce (admin): {e}")
        raise ServerError("Error creating property")


@router.get("/properties/{property_id}", response_model=Property)
def get_property(property_id: str, db: Client = Depends(get_supabase)):
    try:
        property_obj = get_property_crud(db).get_by_id(property_id)
        if not property_obj:
            raise NotFoundError("Property not found")
        return property_obj
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur récupération annonce {property_id} (admin): {e}")
        raise ServerError("Error fetching property")


@router.put("/properties/{property_id}", response_model=Property)
def update_property(
    property_id: str,
    payload: PropertyPayload,
    db: Client = Depends(get_supabase)
):
    """
    Mettre à jour une annonce

    Les champs fournis sont superposés à l'annonce existante avant
    validation; le statut peut être fixé directement.
    """
    try:
        crud = get_property_crud(db)
        existing = crud.get_by_id(property_id)
        if not existing:
            raise NotFoundError("Property not found")

        data = prepare_property(payload.model_dump(exclude_unset=True), existing=existing)
        updated = crud.update(property_id, data)
        logger.info(f"Annonce {property_id} mise à jour par un admin")
        return updated
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur mise à jour annonce {property_id} (admin): {e}")
        raise ServerError("Error updating property")


@router.put("/properties/{property_id}/status", response_model=Property)
def moderate_property(
    property_id: str,
    payload: PropertyStatusUpdate,
    db: Client = Depends(get_supabase)
):
    """Approuver, rejeter ou remettre en attente une annonce"""
    try:
        if payload.status not in PROPERTY_STATUSES:
            raise ValidationFailed("Invalid status value", allowed=list(PROPERTY_STATUSES))

        crud = get_property_crud(db)
        if not crud.get_by_id(property_id):
            raise NotFoundError("Property not found")

        return crud.update(property_id, {"status": payload.status})
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur modération annonce {property_id}: {e}")
        raise ServerError("Error updating property")


@router.delete("/properties/{property_id}", response_model=MessageResponse)
def delete_property(property_id: str, db: Client = Depends(get_supabase)):
    try:
        crud = get_property_crud(db)
        if not crud.get_by_id(property_id):
            raise NotFoundError("Property not found")

        crud.delete(property_id)
        return MessageResponse(message="Property deleted successfully")
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur suppression annonce {property_id} (admin): {e}")
        raise ServerError("Error deleting property")


# ==================== BUYERS ====================

@router.get("/buyers/all", response_model=UserPage)
def list_buyers(
    page: int = Query(1),
    limit: int = Query(10),
    search: str = Query(""),
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str = Query("asc", alias="sortOrder"),
    db: Client = Depends(get_supabase)
):
    """
    Liste paginée des acheteurs

    - **search**: sous-chaîne (insensible à la casse) dans name, email, username, phoneNumber
    - **sortBy**: name, username, email, phoneNumber, createdAt
    - **sortOrder**: desc pour un tri décroissant
    """
    try:
        rows, total, page, total_pages = _fetch_page(
            get_user_crud(db, UserRole.BUYER), page, limit, search, sort_by, sort_order
        )
        return UserPage(
            data=[accounts.to_public(r) for r in rows],
            current_page=page,
            total_pages=total_pages,
            total_items=total,
        )
    except Exception as e:
        logger.error(f"Erreur récupération acheteurs: {e}")
        raise ServerError("Error fetching buyers")


@router.get("/buyers/{buyer_id}", response_model=UserPublic)
def get_buyer(buyer_id: str, db: Client = Depends(get_supabase)):
    try:
        return accounts.get_profile(get_user_crud(db, UserRole.BUYER), buyer_id)
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur récupération acheteur {buyer_id}: {e}")
        raise ServerError("Error fetching buyer")


@router.post("/buyers/add", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def create_buyer(payload: UserCreate, db: Client = Depends(get_supabase)):
    try:
        return accounts.create_identity(get_user_crud(db, UserRole.BUYER), payload)
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur création acheteur: {e}")
        raise ServerError("Error creating buyer")


@router.put("/buyers/update/{buyer_id}", response_model=UserPublic)
def update_buyer(buyer_id: str, payload: UserUpdate, db: Client = Depends(get_supabase)):
    try:
        return accounts.update_identity(get_user_crud(db, UserRole.BUYER), buyer_id, payload)
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur mise à jour acheteur {buyer_id}: {e}")
        raise ServerError("Error updating buyer")


@router.delete("/buyers/delete/{buyer_id}", response_model=MessageResponse)
def delete_buyer(buyer_id: str, db: Client = Depends(get_supabase)):
    try:
        crud = get_user_crud(db, UserRole.BUYER)
        if not crud.get_by_id(buyer_id):
            raise NotFoundError("Buyer not found")

        crud.delete(buyer_id)
        return MessageResponse(message="Buyer deleted successfully")
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur suppression acheteur {buyer_id}: {e}")
        raise ServerError("Error deleting buyer")


# ==================== SELLERS ====================

@router.get("/sellers", response_model=SellerPage)
def list_sellers(
    page: int = Query(1),
    limit: int = Query(10),
    search: str = Query(""),
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str = Query("asc", alias="sortOrder"),
    db: Client = Depends(get_supabase)
):
    """Liste paginée des vendeurs, chacun avec ses annonces"""
    try:
        rows, total, page, total_pages = _fetch_page(
            get_user_crud(db, UserRole.SELLER), page, limit, search, sort_by, sort_order
        )
        data = [
            SellerWithProperties(**r, properties=_seller_properties(db, r["id"]))
            for r in rows
        ]
        return SellerPage(
            data=data,
            current_page=page,
            total_pages=total_pages,
            total_items=total,
        )
    except Exception as e:
        logger.error(f"Erreur récupération vendeurs: {e}")
        raise ServerError("Error fetching sellers")


@router.get("/seller/properties/{seller_id}", response_model=SellerProperties)
def get_seller_properties(seller_id: str, db: Client = Depends(get_supabase)):
    try:
        seller = get_user_crud(db, UserRole.SELLER).get_by_id(seller_id)
        if not seller:
            raise NotFoundError("Seller not found")

        return SellerProperties(
            seller=UserSummary(**seller),
            properties=_seller_properties(db, seller_id),
        )
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur récupération annonces du vendeur {seller_id}: {e}")
        raise ServerError("Error fetching seller properties")


@router.get("/sellers/{seller_id}", response_model=SellerWithProperties)
def get_seller(seller_id: str, db: Client = Depends(get_supabase)):
    try:
        seller = get_user_crud(db, UserRole.SELLER).get_by_id(seller_id)
        if not seller:
            raise NotFoundError("Seller not found")

        return SellerWithProperties(**seller, properties=_seller_properties(db, seller_id))
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur récupération vendeur {seller_id}: {e}")
        raise ServerError("Error fetching seller")


@router.post("/sellers", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def create_seller(payload: UserCreate, db: Client = Depends(get_supabase)):
    try:
        return accounts.create_identity(get_user_crud(db, UserRole.SELLER), payload)
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur création vendeur: {e}")
        raise ServerError("Error creating seller")


@router.put("/sellers/{seller_id}", response_model=UserPublic)
def update_seller(seller_id: str, payload: UserUpdate, db: Client = Depends(get_supabase)):
    try:
        return accounts.update_identity(get_user_crud(db, UserRole.SELLER), seller_id, payload)
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur mise à jour vendeur {seller_id}: {e}")
        raise ServerError("Error updating seller")


@router.delete("/sellers/{seller_id}", response_model=MessageResponse)
def delete_seller(seller_id: str, db: Client = Depends(get_supabase)):
    """
    Supprimer un vendeur

    ⚠️ Refusé tant qu'une annonce le référence comme créateur
    """
    try:
        crud = get_user_crud(db, UserRole.SELLER)
        if not crud.get_by_id(seller_id):
            raise NotFoundError("Seller not found")

        if get_property_crud(db).exists_for_creator(seller_id, CreatorModel.seller):
            raise ValidationFailed(
                "Cannot delete seller with associated properties. "
                "Please reassign or delete them first."
            )

        crud.delete(seller_id)
        return MessageResponse(message="Seller deleted successfully")
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur suppression vendeur {seller_id}: {e}")
        raise ServerError("Error deleting seller")
