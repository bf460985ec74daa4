"""
Fixtures partagées: application, store en mémoire et identités prêtes à l'emploi
"""
import os

# Les paramètres sont lus à l'import de app.core.config
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-key")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient

from app.db import get_supabase
from fake_supabase import FakeSupabase
from main import app

HOUSE = {
    "title": "Maison avec jardin",
    "propertyType": "house",
    "price": "250000",
    "address": "12 rue des Lilas",
    "imageUrl": "https://img.example.com/maison.jpg",
    "beds": 3,
    "baths": 2,
    "sqft": "1400",
}

LAND = {
    "title": "Terrain constructible",
    "propertyType": "land",
    "price": "90000",
    "address": "Route de la Colline",
    "imageUrl": "https://img.example.com/terrain.jpg",
    "landArea": "2000",
    "zoning": "residential",
}

APARTMENT = {
    "title": "Appartement centre-ville",
    "propertyType": "apartment",
    "price": "180000",
    "address": "4 place du Marché",
    "imageUrl": "https://img.example.com/appart.jpg",
    "floorNumber": 3,
    "totalFloors": 6,
}


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def db():
    return FakeSupabase()


@pytest.fixture
def client(db):
    app.dependency_overrides[get_supabase] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Inscrire une identité; renvoie le corps de la réponse (avec token)"""

    def _register(role: str, username: str, **overrides):
        payload = {
            "name": username.capitalize(),
            "username": username,
            "email": f"{username}@example.com",
            "password": "secret123",
            "phoneNumber": "0612345678",
            "role": role,
        }
        payload.update(overrides)
        response = client.post("/api/auth/register", json=payload)
        assert response.status_code == 201, response.json()
        return response.json()

    return _register


@pytest.fixture
def admin(register):
    return register("admin", "root")


@pytest.fixture
def seller(register):
    return register("seller", "sam")


@pytest.fixture
def buyer(register):
    return register("buyer", "alice")


@pytest.fixture
def seller_listing(client, seller):
    """Annonce d'un vendeur, encore en attente de modération"""
    response = client.post("/api/seller/properties", json=HOUSE, headers=auth(seller["token"]))
    assert response.status_code == 201, response.json()
    return response.json()


@pytest.fixture
def approved_listing(client, admin, seller_listing):
    response = client.put(
        f"/api/admin/properties/{seller_listing['id']}/status",
        json={"status": "approved"},
        headers=auth(admin["token"]),
    )
    assert response.status_code == 200, response.json()
    return response.json()
