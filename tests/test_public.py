"""
Tests de la surface publique et parcours complet d'un acheteur
Exécuter: pytest tests/test_public.py -v
"""
from conftest import HOUSE, LAND, auth


def test_public_list_shows_only_approved(client, seller, approved_listing):
    client.post("/api/seller/properties", json=LAND, headers=auth(seller["token"]))

    response = client.get("/api/properties")

    assert response.status_code == 200
    items = response.json()
    assert [p["id"] for p in items] == [approved_listing["id"]]
    assert items[0]["creator"] == {
        "id": seller["id"], "name": "Sam", "email": "sam@example.com", "phoneNumber": "0612345678"
    }
    assert "interested" not in items[0]


def test_public_detail(client, approved_listing, seller_listing):
    response = client.get(f"/api/properties/{approved_listing['id']}")

    assert response.status_code == 200
    assert response.json()["title"] == HOUSE["title"]


def test_public_detail_hides_pending_listing(client, seller_listing):
    assert client.get(f"/api/properties/{seller_listing['id']}").status_code == 404


def test_public_detail_malformed_id(client):
    assert client.get("/api/properties/not-an-id").status_code == 404


def test_buyer_journey(client, admin, seller, approved_listing):
    client.post("/api/seller/properties", json=LAND, headers=auth(seller["token"]))

    registered = client.post("/api/auth/register", json={
        "name": "Alice",
        "username": "alice",
        "email": "alice@x.com",
        "password": "secret1",
        "phoneNumber": "+1 234 567 8901",
        "role": "buyer",
    })
    assert registered.status_code == 201

    signin = client.post("/api/auth/signin", json={
        "email": "alice@x.com", "password": "secret1", "role": "buyer"
    })
    assert signin.status_code == 200
    headers = auth(signin.json()["token"])

    listings = client.get("/api/buyer/properties", headers=headers).json()
    assert listings
    assert all(p["status"] == "approved" for p in listings)

    listing_id = listings[0]["id"]
    marked = client.post(
        f"/api/buyer/properties/{listing_id}/interested", json={"action": "mark"}, headers=headers
    )
    assert marked.status_code == 200

    detail = client.get(f"/api/buyer/properties/{listing_id}", headers=headers).json()
    assert detail["isInterested"] is True
