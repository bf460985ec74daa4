# app/models/property.py

from pydantic import field_validator
from typing import Optional, List
from datetime import datetime
from enum import Enum

from .base import CamelModel
from .user import UserPublic, UserSummary


class PropertyType(str, Enum):
    house = "house"
    land = "land"
    apartment = "apartment"


class PropertyStatus(str, Enum):
    """Statut de modération"""
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class CreatorModel(str, Enum):
    """Store d'origine du créateur de l'annonce"""
    admin = "Admin"
    seller = "Seller"


class PropertyPayload(CamelModel):
    """Corps de création / mise à jour; validé par check_property_fields"""
    title: Optional[str] = None
    property_type: Optional[str] = None
    price: Optional[str] = None
    address: Optional[str] = None
    image_url: Optional[str] = None
    status: Optional[str] = None

    # house
    beds: Optional[int] = None
    baths: Optional[float] = None
    sqft: Optional[str] = None

    # land
    land_area: Optional[str] = None
    zoning: Optional[str] = None

    # apartment
    floor_number: Optional[int] = None
    total_floors: Optional[int] = None

    @field_validator("price", "sqft", "land_area", "zoning", mode="before")
    @classmethod
    def numbers_as_text(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            # 0 numérique reste "absent" pour le contrôle de présence
            return str(v) if v else None
        return v

    @field_validator("title", "price", "address", "image_url", "sqft", "land_area", "zoning")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class PropertyStatusUpdate(CamelModel):
    status: Optional[str] = None


class InterestRequest(CamelModel):
    action: Optional[str] = None


class PropertyBase(CamelModel):
    id: str
    title: str
    property_type: PropertyType
    price: str
    address: str
    image_url: str
    status: PropertyStatus
    beds: Optional[int] = None
    baths: Optional[float] = None
    sqft: Optional[str] = None
    land_area: Optional[str] = None
    zoning: Optional[str] = None
    floor_number: Optional[int] = None
    total_floors: Optional[int] = None
    created_by: str
    created_by_model: CreatorModel
    created_at: datetime
    updated_at: datetime

    @field_validator("id", "created_by", mode="before")
    @classmethod
    def stringify_ids(cls, v):
        return str(v)


class Property(PropertyBase):
    """Modèle complet avec l'ensemble des acheteurs intéressés"""
    interested: List[str] = []


class PropertyListItem(PropertyBase):
    """Version publique: créateur résolu, sans la liste des intéressés"""
    creator: Optional[UserSummary] = None


class PropertyDetail(CamelModel):
    """Vue détaillée côté acheteur"""
    property: Property
    creator: Optional[UserSummary] = None
    buyer: Optional[UserSummary] = None
    is_interested: bool = False


class PropertyDeleted(CamelModel):
    message: str
    deleted_property: Property


class SellerWithProperties(UserPublic):
    properties: List[Property] = []


class SellerPage(CamelModel):
    data: List[SellerWithProperties]
    current_page: int
    total_pages: int
    total_items: int


class SellerProperties(CamelModel):
    seller: UserSummary
    properties: List[Property]
