"""
Tests des règles de validation
Exécuter: pytest tests/test_validators.py -v
"""
import pytest

from app.core.errors import ValidationFailed
from app.core.validators import (
    check_property_fields,
    clear_unrelated_type_fields,
    is_admin_phone,
    is_blank,
    is_profile_phone,
    missing_fields,
    validate_identity_update,
    validate_registration,
    validate_signin,
)

VALID_REGISTRATION = {
    "name": "Alice",
    "username": "alice",
    "email": "alice@x.com",
    "password": "secret1",
    "phone_number": "+1 234 567 8901",
    "role": "buyer",
}

HOUSE = {
    "title": "Maison",
    "property_type": "house",
    "price": "250000",
    "address": "12 rue des Lilas",
    "image_url": "https://img.example.com/maison.jpg",
    "beds": 3,
    "baths": 2,
    "sqft": "1400",
}


def test_valid_registration_has_no_errors():
    assert validate_registration(VALID_REGISTRATION) == []


def test_registration_collects_every_error():
    errors = validate_registration({"name": "A", "username": "al", "role": "guest"})

    assert "Name must be between 2 and 50 characters" in errors
    assert "Username must be between 3 and 30 characters" in errors
    assert "Valid email is required" in errors
    assert "Password must be at least 6 characters" in errors
    assert "Invalid role specified" in errors


def test_registration_phone_required_for_seller_only():
    seller = {**VALID_REGISTRATION, "role": "seller", "phone_number": None}
    admin = {**VALID_REGISTRATION, "role": "admin", "phone_number": None}

    assert validate_registration(seller) == ["Valid phone number is required for buyers and sellers"]
    assert validate_registration(admin) == []


@pytest.mark.parametrize("phone", ["0612345678", "+1 (234) 567-8901", "+33 6 12 34 56 78"])
def test_registration_phone_is_loose(phone):
    assert validate_registration({**VALID_REGISTRATION, "phone_number": phone}) == []


def test_signin_rules():
    assert validate_signin({"email": "a@b.co", "password": "secret1", "role": "seller"}) == []
    assert validate_signin({"email": "nope", "password": "123", "role": "root"}) == [
        "Valid email is required",
        "Password must be at least 6 characters",
        "Invalid role specified",
    ]


def test_identity_update_checks_only_provided_fields():
    assert validate_identity_update({"name": "Bob"}) == []
    assert validate_identity_update({"email": "bad"}) == ["Please enter a valid email"]
    assert validate_identity_update({"phone_number": "12"}) == ["Please enter a valid phone number"]


def test_phone_patterns_stay_distinct():
    # Création admin: exactement 10 chiffres
    assert is_admin_phone("0612345678")
    assert not is_admin_phone("+1 234 567 8901")
    # Profil: pas de parenthèses
    assert is_profile_phone("+1 234-567-8901")
    assert not is_profile_phone("(234) 567-8901")


def test_blank_is_truthiness():
    assert is_blank(None)
    assert is_blank("   ")
    assert is_blank(0)
    assert not is_blank("0")
    assert missing_fields({"title": "", "price": 0, "address": "x"}, ("title", "price", "address", "image_url")) == [
        "title", "price", "imageUrl"
    ]


def test_complete_house_passes():
    check_property_fields(HOUSE)


def test_missing_common_fields():
    with pytest.raises(ValidationFailed) as exc:
        check_property_fields({**HOUSE, "title": "", "image_url": None})

    assert exc.value.status_code == 400
    assert exc.value.to_dict() == {"message": "Missing required fields", "fields": ["title", "imageUrl"]}


def test_unknown_property_type():
    with pytest.raises(ValidationFailed) as exc:
        check_property_fields({**HOUSE, "property_type": "castle"})

    assert exc.value.message == "Invalid property type"
    assert exc.value.details["allowed"] == ["house", "land", "apartment"]


def test_house_without_beds_fails():
    with pytest.raises(ValidationFailed) as exc:
        check_property_fields({**HOUSE, "beds": None})

    assert exc.value.message == "Missing required fields for house property"
    assert exc.value.details["required"] == ["beds", "baths", "sqft"]


def test_land_without_zoning_fails():
    land = {**HOUSE, "property_type": "land", "land_area": "2000", "zoning": ""}
    with pytest.raises(ValidationFailed) as exc:
        check_property_fields(land)

    assert exc.value.details["required"] == ["landArea", "zoning"]


def test_unknown_status_value():
    with pytest.raises(ValidationFailed) as exc:
        check_property_fields({**HOUSE, "status": "archived"})

    assert exc.value.message == "Invalid status value"


def test_unrelated_type_fields_are_cleared():
    cleaned = clear_unrelated_type_fields({**HOUSE, "zoning": "commercial", "floor_number": 4})

    assert cleaned["beds"] == 3
    assert cleaned["zoning"] is None
    assert cleaned["land_area"] is None
    assert cleaned["floor_number"] is None


def test_null_status_value_is_rejected():
    with pytest.raises(ValidationFailed) as exc:
        check_property_fields({**HOUSE, "status": None})

    assert exc.value.message == "Invalid status value"
