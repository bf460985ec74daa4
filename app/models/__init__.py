# app/models/__init__.py
"""
Modèles Pydantic pour l'API Estately

Modules:
- User : Identités (acheteur, vendeur, admin) et authentification
- Property : Annonces immobilières et modération
- Appointment : Demandes de visite
- Dashboard : Statistiques admin et vendeur
"""

from .base import CamelModel, MessageResponse

# ====================================
# USER MODELS
# ====================================
from .user import (
    UserRole,
    RegisterRequest,
    SigninRequest,
    UserCreate,
    UserUpdate,
    ProfileUpdate,
    PasswordChange,
    UserSummary,
    UserPublic,
    AuthResponse,
    UserPage,
)

# ====================================
# PROPERTY MODELS
# ====================================
from .property import (
    PropertyType,
    PropertyStatus,
    CreatorModel,
    PropertyPayload,
    PropertyStatusUpdate,
    InterestRequest,
    PropertyBase,
    Property,
    PropertyListItem,
    PropertyDetail,
    PropertyDeleted,
    SellerWithProperties,
    SellerPage,
    SellerProperties,
)

# ====================================
# APPOINTMENT MODELS
# ====================================
from .appointment import (
    AppointmentStatus,
    AppointmentCreate,
    AppointmentStatusUpdate,
    PropertySummary,
    Appointment,
)

# ====================================
# DASHBOARD MODELS
# ====================================
from .dashboard import (
    RecentProperty,
    RecentUser,
    AdminDashboard,
    RecentActivity,
    SellerDashboardStats,
)

# ====================================
# EXPORTS
# ====================================
__all__ = [
    "CamelModel",
    "MessageResponse",

    # User
    "UserRole",
    "RegisterRequest",
    "SigninRequest",
    "UserCreate",
    "UserUpdate",
    "ProfileUpdate",
    "PasswordChange",
    "UserSummary",
    "UserPublic",
    "AuthResponse",
    "UserPage",

    # Property
    "PropertyType",
    "PropertyStatus",
    "CreatorModel",
    "PropertyPayload",
    "PropertyStatusUpdate",
    "InterestRequest",
    "PropertyBase",
    "Property",
    "PropertyListItem",
    "PropertyDetail",
    "PropertyDeleted",
    "SellerWithProperties",
    "SellerPage",
    "SellerProperties",

    # Appointment
    "AppointmentStatus",
    "AppointmentCreate",
    "AppointmentStatusUpdate",
    "PropertySummary",
    "Appointment",

    # Dashboard
    "RecentProperty",
    "RecentUser",
    "AdminDashboard",
    "RecentActivity",
    "SellerDashboardStats",
]
