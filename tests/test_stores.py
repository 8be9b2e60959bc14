"""Store API tests."""

from conftest import TEST_PASSWORD

from storerate.models.rating import Rating
from storerate.models.user import User

NEW_STORE = {
    "name": "Riverside Hardware and Tools",
    "email": "hardware@example.com",
    "address": "4 Riverside Road, Springfield",
}


def test_list_stores(client, auth_headers, store):
    """Test any authenticated user can browse stores."""
    response = client.get("/stores", headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 1
    data = body["data"][0]
    assert data["name"] == store.name
    assert data["averageRating"] == 0
    assert data["totalRatings"] == 0
    assert data["userRating"] is None


def test_list_stores_requires_authentication(client, store):
    """Test browsing without a token is 401."""
    assert client.get("/stores").status_code == 401


def test_list_stores_filter_and_sort_params(client, auth_headers, create_store):
    """Test query parameters reach the catalog."""
    create_store(name="Zebra Crossing Pet Supplies", address="9 Zoo Lane")
    create_store(name="Apple Orchard Fruit Stand", address="9 Zoo Road")
    create_store(name="Unrelated Shoe Repair Shop", address="1 High Street")

    response = client.get(
        "/stores",
        headers=auth_headers,
        params={"address": "zoo", "sortBy": "name", "sortOrder": "desc"},
    )
    assert response.status_code == 200
    names = [s["name"] for s in response.json()["data"]]
    assert names == ["Zebra Crossing Pet Supplies", "Apple Orchard Fruit Stand"]


def test_list_stores_bad_sort_field_falls_back(client, auth_headers, create_store):
    """Test an unknown sortBy does not error."""
    create_store(name="Second Store Alphabetically")
    create_store(name="First Store Alphabetically")

    response = client.get("/stores", headers=auth_headers, params={"sortBy": "drop table"})
    assert response.status_code == 200
    names = [s["name"] for s in response.json()["data"]]
    assert names == ["First Store Alphabetically", "Second Store Alphabetically"]


def test_get_store(client, auth_headers, store):
    """Test getting a single store."""
    response = client.get(f"/stores/{store.id}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["data"]["email"] == store.email


def test_get_store_not_found(client, auth_headers):
    """Test a missing store is 404."""
    response = client.get("/stores/999999", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Store not found"


def test_create_store_admin_only(client, auth_headers, owner_headers):
    """Test non-admins are forbidden, distinct from unauthenticated."""
    assert client.post("/stores", headers=auth_headers, json=NEW_STORE).status_code == 403
    assert client.post("/stores", headers=owner_headers, json=NEW_STORE).status_code == 403
    assert client.post("/stores", json=NEW_STORE).status_code == 401


def test_create_store(client, admin_headers, db):
    """Test creating a store without owner details creates no user."""
    users_before = db.query(User).count()

    response = client.post("/stores", headers=admin_headers, json=NEW_STORE)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["name"] == NEW_STORE["name"]
    assert data["ownerId"] is None
    assert db.query(User).count() == users_before


def test_create_store_with_owner(client, admin_headers, db):
    """Test owner details create exactly one store owner bound to the new store."""
    response = client.post(
        "/stores",
        headers=admin_headers,
        json={**NEW_STORE, "ownerName": "Riverside Hardware Owner", "ownerPassword": TEST_PASSWORD},
    )
    assert response.status_code == 201
    data = response.json()["data"]

    owners = db.query(User).filter(User.store_id == data["id"]).all()
    assert len(owners) == 1
    assert owners[0].id == data["ownerId"]
    assert owners[0].role == "store_owner"
    assert owners[0].email == NEW_STORE["email"]

    login = client.post(
        "/auth/login", json={"email": NEW_STORE["email"], "password": TEST_PASSWORD}
    )
    assert login.status_code == 200
    user = login.json()["data"]["user"]
    assert user["role"] == "store_owner"
    assert user["storeId"] == data["id"]


def test_create_store_owner_email_taken(client, admin_headers, create_user, db):
    """Test the whole creation is rejected when the owner email is already a user."""
    create_user(NEW_STORE["email"])

    response = client.post(
        "/stores",
        headers=admin_headers,
        json={**NEW_STORE, "ownerName": "Riverside Hardware Owner", "ownerPassword": TEST_PASSWORD},
    )
    assert response.status_code == 409
    assert client.get("/stores", headers=admin_headers).json()["count"] == 0


def test_create_store_duplicate_email(client, admin_headers, store):
    """Test store emails are unique."""
    response = client.post(
        "/stores", headers=admin_headers, json={**NEW_STORE, "email": store.email.upper()}
    )
    assert response.status_code == 409


def test_create_store_validation(client, admin_headers):
    """Test store name length is enforced."""
    response = client.post("/stores", headers=admin_headers, json={**NEW_STORE, "name": "Shop"})
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "name"


def test_update_store(client, admin_headers, store):
    """Test updating store fields."""
    response = client.put(
        f"/stores/{store.id}",
        headers=admin_headers,
        json={**NEW_STORE, "email": "renamed@example.com"},
    )
    assert response.status_code == 200
    assert response.json()["data"]["email"] == "renamed@example.com"
    assert response.json()["data"]["name"] == NEW_STORE["name"]


def test_update_store_not_found(client, admin_headers):
    """Test updating a missing store is 404."""
    response = client.put("/stores/999999", headers=admin_headers, json=NEW_STORE)
    assert response.status_code == 404


def test_update_store_email_conflict(client, admin_headers, store, create_store):
    """Test an update cannot take another store's email."""
    other = create_store(name="Another Store For Conflict", email="another@example.com")
    response = client.put(
        f"/stores/{other.id}", headers=admin_headers, json={**NEW_STORE, "email": store.email}
    )
    assert response.status_code == 409


def test_delete_store_cascades_ratings(client, admin_headers, auth_headers, store, db):
    """Test deleting a store removes its ratings and later lookups are 404."""
    client.post("/ratings", headers=auth_headers, json={"storeId": store.id, "rating": 4})
    store_id = store.id

    response = client.delete(f"/stores/{store_id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Store deleted successfully"

    assert db.query(Rating).filter(Rating.store_id == store_id).count() == 0
    assert client.get(f"/stores/{store_id}", headers=auth_headers).status_code == 404


def test_delete_store_clears_owner_association(client, admin_headers, owner_headers, store, db):
    """Test the owner account survives store deletion without a store."""
    client.delete(f"/stores/{store.id}", headers=admin_headers)

    me = client.get("/auth/me", headers=owner_headers)
    assert me.status_code == 200
    assert me.json()["data"]["storeId"] is None

    dashboard = client.get("/dashboard/store-owner", headers=owner_headers)
    assert dashboard.status_code == 403
    assert dashboard.json()["error"] == "NO_STORE_ASSOCIATED"


def test_delete_store_not_found(client, admin_headers):
    """Test deleting a missing store is 404."""
    assert client.delete("/stores/999999", headers=admin_headers).status_code == 404


def test_store_path_id_out_of_range(client, admin_headers):
    """Test store ids outside the id column range are a 400, not a server error."""
    for store_id in (2**70, 0, -1):
        assert client.get(f"/stores/{store_id}", headers=admin_headers).status_code == 400
        assert client.put(
            f"/stores/{store_id}", headers=admin_headers, json=NEW_STORE
        ).status_code == 400
        assert client.delete(f"/stores/{store_id}", headers=admin_headers).status_code == 400
