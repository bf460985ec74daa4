# tests/test_models.py
"""
Tests des modèles Pydantic
Exécuter: pytest tests/test_models.py -v
"""
import pytest
from datetime import datetime
from pydantic import ValidationError

from app.models import (
    Appointment, AppointmentCreate, AuthResponse,
    Property, PropertyPayload, PropertyStatus, PropertyType, CreatorModel,
    UserPublic, UserRole
)

PROPERTY_ROW = {
    "id": "6f1c1c55-6b8f-4a0c-9a3b-1f1f1f1f1f1f",
    "title": "Maison avec jardin",
    "property_type": "house",
    "price": "250000",
    "address": "12 rue des Lilas",
    "image_url": "https://img.example.com/maison.jpg",
    "status": "pending",
    "beds": 3,
    "baths": 2,
    "sqft": "1400",
    "created_by": "0b6c3c1e-2f7e-4c83-8d57-3a1d6ad2b001",
    "created_by_model": "Seller",
    "interested": [],
    "created_at": "2024-01-01T00:00:00+00:00",
    "updated_at": "2024-01-01T00:00:00+00:00",
}


def test_property_payload_accepts_camel_case():
    """Les noms camelCase du client sont acceptés"""
    payload = PropertyPayload(**{
        "title": "  Maison  ",
        "propertyType": "house",
        "price": 250000,
        "imageUrl": "https://img.example.com/maison.jpg",
        "floorNumber": 2,
    })
    assert payload.title == "Maison"
    assert payload.property_type == "house"
    assert payload.image_url == "https://img.example.com/maison.jpg"
    assert payload.floor_number == 2


def test_property_payload_numeric_price_becomes_text():
    """Le prix est stocké comme texte, même envoyé en nombre"""
    payload = PropertyPayload(price=1500000, sqft=120.5)
    assert payload.price == "1500000"
    assert payload.sqft == "120.5"


def test_property_payload_rejects_non_numeric_beds():
    with pytest.raises(ValidationError):
        PropertyPayload(beds="beaucoup")


def test_property_serializes_to_camel_case():
    property_obj = Property(**PROPERTY_ROW)
    data = property_obj.model_dump(by_alias=True)

    assert data["propertyType"] == PropertyType.house
    assert data["createdByModel"] == CreatorModel.seller
    assert "imageUrl" in data
    assert "property_type" not in data
    assert property_obj.status == PropertyStatus.pending


def test_property_rejects_unknown_status():
    with pytest.raises(ValidationError):
        Property(**{**PROPERTY_ROW, "status": "archived"})


def test_user_public_hides_password_hash():
    """Le hash n'apparaît jamais dans la représentation publique"""
    user = UserPublic(**{
        "id": "0b6c3c1e-2f7e-4c83-8d57-3a1d6ad2b001",
        "name": "Alice",
        "username": "alice",
        "email": "alice@example.com",
        "phone_number": "0612345678",
        "password_hash": "$2b$04$xxxxxxxx",
        "role": "buyer",
        "created_at": datetime(2024, 1, 1),
    })
    data = user.model_dump(by_alias=True)

    assert user.role == UserRole.BUYER
    assert data["phoneNumber"] == "0612345678"
    assert "password_hash" not in data
    assert "passwordHash" not in data


def test_auth_response_carries_token():
    response = AuthResponse(
        id="1", name="Root", username="root", email="root@example.com",
        role="admin", created_at=datetime(2024, 1, 1), token="abc.def.ghi",
    )
    assert response.phone_number is None
    assert response.model_dump(by_alias=True)["token"] == "abc.def.ghi"


def test_appointment_create_parses_date():
    appointment = AppointmentCreate(**{
        "propertyId": "p1",
        "sellerId": "s1",
        "date": "2024-06-01T10:30:00",
        "placeToVisit": " Sur place ",
        "message": "Disponible le matin",
    })
    assert appointment.date == datetime(2024, 6, 1, 10, 30)
    assert appointment.place_to_visit == "Sur place"


def test_appointment_create_invalid_date():
    """Date illisible (doit échouer)"""
    with pytest.raises(ValidationError):
        AppointmentCreate(date="demain matin")


def test_appointment_references_are_optional():
    appointment = Appointment(**{
        "id": "a1",
        "date": "2024-06-01T10:30:00+00:00",
        "place_to_visit": "Sur place",
        "message": "Bonjour",
        "status": "pending",
        "seller_id": "s1",
        "buyer_id": "b1",
        "property_id": "p1",
        "created_at": "2024-05-01T00:00:00+00:00",
    })
    assert appointment.seller is None
    assert appointment.property is None


def test_property_payload_numeric_zero_is_absent():
    """0 envoyé en nombre reste absent pour le contrôle de présence"""
    payload = PropertyPayload(price=0, sqft=0.0, land_area="0")
    assert payload.price is None
    assert payload.sqft is None
    assert payload.land_area == "0"
