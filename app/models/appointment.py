"""
Modèles Pydantic pour les rendez-vous de visite
Un rendez-vous relie un acheteur, un vendeur et une annonce
"""

from pydantic import field_validator
from typing import Optional
from datetime import datetime
from enum import Enum

from .base import CamelModel
from .user import UserSummary


class AppointmentStatus(str, Enum):
    """Statut du rendez-vous; le vendeur peut passer de n'importe quel statut à n'importe quel autre"""
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"
    completed = "completed"


class AppointmentCreate(CamelModel):
    property_id: Optional[str] = None
    seller_id: Optional[str] = None
    date: Optional[datetime] = None
    place_to_visit: Optional[str] = None
    message: Optional[str] = None

    @field_validator("place_to_visit", "message")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class AppointmentStatusUpdate(CamelModel):
    status: Optional[str] = None


class PropertySummary(CamelModel):
    """Annonce résolue dans un rendez-vous"""
    id: str
    title: str
    address: str
    price: str
    image_url: str
    beds: Optional[int] = None
    baths: Optional[float] = None
    sqft: Optional[str] = None


class Appointment(CamelModel):
    id: str
    date: datetime
    place_to_visit: str
    message: str
    status: AppointmentStatus
    seller_id: str
    buyer_id: str
    property_id: str
    created_at: datetime

    # Références résolues à la lecture (absentes si elles ne résolvent plus)
    seller: Optional[UserSummary] = None
    buyer: Optional[UserSummary] = None
    property: Optional[PropertySummary] = None

    @field_validator("id", "seller_id", "buyer_id", "property_id", mode="before")
    @classmethod
    def stringify_ids(cls, v):
        return str(v)
