import pytest

from cosmetics_store.services.inventory import InventoryLedgerService


def _create(client, **overrides):
    payload = {
        "name": "Cream",
        "price": 10.0,
        "quantity": 5,
        "brand": "BrandA",
        "category": "Уход",
    }
    payload.update(overrides)
    return client.post("/api/v1/products", json=payload)


# ============================================================================
# CREATE PRODUCT TESTS
# ============================================================================


def test_create_product_success(client, service: InventoryLedgerService):
    """Test successful product creation."""
    response = _create(client)
    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Product added!"
    assert data["persisted"] is True
    assert data["product"] == {
        "id": 1,
        "name": "Cream",
        "price": 10.0,
        "quantity": 5,
        "brand": "BrandA",
        "category": "Уход",
    }
    assert len(service.list_products()) == 1


def test_create_product_blank_name(client, service: InventoryLedgerService):
    """Test product creation with a blank name fails with EMPTY_FIELD."""
    response = _create(client, name="   ")
    assert response.status_code == 400
    assert response.json()["code"] == "EMPTY_FIELD"
    assert response.json()["detail"] == "Name cannot be empty"
    assert service.list_products() == []


def test_create_product_negative_price(client):
    response = _create(client, price=-5)
    assert response.status_code == 400
    assert response.json()["code"] == "NEGATIVE_VALUE"


def test_create_product_missing_required_fields(client):
    """Test product creation with missing required fields fails."""
    response = client.post("/api/v1/products", json={"name": "Cream"})
    # Pydantic validates required fields at request parsing level (422)
    assert response.status_code == 422


@pytest.mark.parametrize("price", ["NaN", "Infinity", "-Infinity"])
def test_create_product_non_finite_price(client, service: InventoryLedgerService, price: str):
    """Test non-finite prices are refused before reaching the catalog."""
    response = _create(client, price=price)
    assert response.status_code == 422
    assert service.list_products() == []


# ============================================================================
# GET PRODUCTS TESTS
# ============================================================================


def test_get_all_products_in_insertion_order(client):
    _create(client, name="Cream")
    _create(client, name="Lipstick", category="Макияж")

    response = client.get("/api/v1/products")
    assert response.status_code == 200
    assert [p["name"] for p in response.json()] == ["Cream", "Lipstick"]


def test_get_products_filtered(client):
    _create(client, name="Day Cream", brand="Nivea")
    _create(client, name="Lipstick", brand="Nivea", category="Макияж")
    _create(client, name="Night Cream", brand="Garnier")

    response = client.get("/api/v1/products", params={"name": "cream", "brand": "niv"})
    assert [p["name"] for p in response.json()] == ["Day Cream"]

    response = client.get("/api/v1/products", params={"category": "Макияж"})
    assert [p["name"] for p in response.json()] == ["Lipstick"]


def test_get_product_by_id(client):
    _create(client)
    response = client.get("/api/v1/products/1")
    assert response.status_code == 200
    assert response.json()["name"] == "Cream"


def test_get_product_by_id_not_found(client):
    response = client.get("/api/v1/products/99")
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


# ============================================================================
# UPDATE PRODUCT TESTS
# ============================================================================


def test_update_product(client):
    _create(client)
    response = client.put(
        "/api/v1/products/1",
        json={"name": "Night Cream", "price": 12.5, "quantity": 7, "brand": "BrandZ"},
    )
    assert response.status_code == 200
    product = response.json()["product"]
    assert product["name"] == "Night Cream"
    assert product["price"] == 12.5
    assert product["quantity"] == 7
    assert product["brand"] == "BrandZ"
    assert product["category"] == "Уход"


def test_update_product_blank_category(client):
    _create(client)
    response = client.put(
        "/api/v1/products/1",
        json={"name": "Cream", "price": 10.0, "quantity": 5, "category": ""},
    )
    assert response.status_code == 400
    assert response.json()["code"] == "EMPTY_FIELD"


def test_update_product_not_found(client):
    response = client.put(
        "/api/v1/products/5",
        json={"name": "Cream", "price": 10.0, "quantity": 5},
    )
    assert response.status_code == 404


def test_update_product_non_finite_price(client, service: InventoryLedgerService):
    _create(client)
    response = client.put(
        "/api/v1/products/1",
        json={"name": "Cream", "price": "NaN", "quantity": 5},
    )
    assert response.status_code == 422
    assert service.get_product(1).price == 10.0


# ============================================================================
# DELETE PRODUCT TESTS
# ============================================================================


def test_delete_product(client, service: InventoryLedgerService):
    _create(client)
    response = client.delete("/api/v1/products/1")
    assert response.status_code == 200
    assert response.json()["message"] == "Product deleted!"
    assert service.list_products() == []


def test_delete_missing_product_still_succeeds(client):
    """Test deleting an unknown id is a successful no-op."""
    response = client.delete("/api/v1/products/77")
    assert response.status_code == 200
    assert response.json()["product"] is None


# ============================================================================
# SELL PRODUCT TESTS
# ============================================================================


def test_sell_product(client):
    _create(client)
    response = client.post("/api/v1/products/1/sell", json={"quantity": 3})
    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Sold!"
    assert data["product"]["quantity"] == 2
    assert data["sale"]["id"] == 1
    assert data["sale"]["total"] == 30.0
    assert data["sale"]["product"]["name"] == "Cream"


def test_sell_product_exceeding_stock(client):
    _create(client)
    response = client.post("/api/v1/products/1/sell", json={"quantity": 6})
    assert response.status_code == 409
    assert response.json()["code"] == "QUANTITY_EXCEEDED"


def test_sell_product_zero_quantity(client):
    _create(client)
    response = client.post("/api/v1/products/1/sell", json={"quantity": 0})
    assert response.status_code == 400
    assert response.json()["code"] == "NEGATIVE_VALUE"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
