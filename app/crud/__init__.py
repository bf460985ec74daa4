# app/crud/__init__.py
"""
Couche CRUD pour l'API Estately

Modules CRUD:
- User: Identités, une table par rôle
- Property: Annonces immobilières
- Appointment: Rendez-vous de visite
"""

from .user import UserCRUD, get_user_crud, is_valid_id
from .property import PropertyCRUD, get_property_crud
from .appointment import AppointmentCRUD, get_appointment_crud

__all__ = [
    # User CRUD
    "UserCRUD",
    "get_user_crud",
    "is_valid_id",

    # Property CRUD
    "PropertyCRUD",
    "get_property_crud",

    # Appointment CRUD
    "AppointmentCRUD",
    "get_appointment_crud",
]
