import logging

from app.services.masters import product_service
from app.core.exceptions import DatabaseError


def _movements(client, product_id):
    resp = client.get(f"/api/products/{product_id}/movements")
    assert resp.status_code == 200, resp.text
    return resp.json()


def test_create_product_returns_created_row(client, widget):
    resp = client.post("/api/products", json=widget)
    assert resp.status_code == 201, resp.text

    body = resp.json()
    assert body["name"] == "Widget"
    assert body["sku"] == "W1"
    assert body["stock"] == 10
    assert body["min_stock"] == 2
    assert body["price"] == 9.99
    assert body["category_id"] is None
    assert body["created_at"] is not None
    # joined names are only part of list/get responses
    assert "category_name" not in body
    assert "supplier_name" not in body


def test_create_product_records_initial_stock_movement(client, create_product):
    product = create_product(stock=10)

    movements = _movements(client, product["id"])
    assert len(movements) == 1
    assert movements[0]["movement_type"] == "IN"
    assert movements[0]["quantity"] == 10
    assert movements[0]["notes"] == "Initial stock"
    assert movements[0]["product_name"] == "Widget"


def test_create_product_without_stock_uses_storage_default(client):
    resp = client.post("/api/products", json={"name": "Bare", "sku": "B1", "price": 1})
    assert resp.status_code == 201, resp.text
    assert resp.json()["stock"] == 0

    movements = _movements(client, resp.json()["id"])
    assert [m["quantity"] for m in movements] == [0]


def test_duplicate_sku_is_a_conflict(client, create_product):
    create_product(sku="W1")

    resp = client.post(
        "/api/products",
        json={"name": "Other", "sku": "W1", "price": 1, "stock": 3, "min_stock": 0},
    )
    assert resp.status_code == 400
    assert "error" in resp.json()

    products = client.get("/api/products").json()
    assert len(products) == 1
    # the failed insert left no movement behind
    assert len(_movements(client, products[0]["id"])) == 1


def test_missing_required_column_is_internal_error(client):
    resp = client.post("/api/products", json={"sku": "NO-NAME", "price": 1})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Could not create product"}


def test_invalid_body_type_is_rejected(client):
    resp = client.post("/api/products", json={"name": "X", "sku": "X", "stock": "lots"})
    assert resp.status_code == 422
    assert resp.json()["error"] == "Invalid request data"


def test_list_products_newest_first_with_joined_names(client, create_product):
    category = client.post("/api/categories", json={"name": "Tools"}).json()
    supplier = client.post("/api/suppliers", json={"name": "ACME"}).json()

    create_product(sku="A", name="First")
    create_product(
        sku="B",
        name="Second",
        category_id=category["id"],
        supplier_id=supplier["id"],
    )

    resp = client.get("/api/products")
    assert resp.status_code == 200
    body = resp.json()

    assert [p["sku"] for p in body] == ["B", "A"]
    assert body[0]["category_name"] == "Tools"
    assert body[0]["supplier_name"] == "ACME"
    assert body[1]["category_name"] is None
    assert body[1]["supplier_name"] is None


def test_get_product(client, create_product):
    product = create_product()

    resp = client.get(f"/api/products/{product['id']}")
    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == product["id"]
    assert body["price"] == 9.99
    assert "category_name" in body


def test_get_missing_product_returns_only_error(client):
    resp = client.get("/api/products/9999")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Product not found"}


def test_error_code_is_logged_not_returned(client, caplog):
    caplog.set_level(logging.INFO, logger="app.core.error_handlers")

    resp = client.get("/api/products/9999")

    assert "code" not in resp.json()
    assert "GET /api/products/9999 -> 404 PRODUCT_NOT_FOUND" in caplog.text


def test_update_stock_down_records_out_movement(client, widget):
    created = client.post("/api/products", json=widget).json()

    resp = client.put(f"/api/products/{created['id']}", json={**widget, "stock": 3})
    assert resp.status_code == 200, resp.text
    assert resp.json()["stock"] == 3

    movements = _movements(client, created["id"])
    assert len(movements) == 2
    latest = movements[0]
    assert latest["quantity"] == -7
    assert latest["movement_type"] == "OUT"
    assert latest["notes"] == "Inventory adjustment"


def test_update_stock_up_records_in_movement(client, widget):
    created = client.post("/api/products", json=widget).json()

    client.put(f"/api/products/{created['id']}", json={**widget, "stock": 15})

    latest = _movements(client, created["id"])[0]
    assert latest["quantity"] == 5
    assert latest["movement_type"] == "IN"


def test_update_without_stock_change_records_nothing(client, widget):
    created = client.post("/api/products", json=widget).json()

    resp = client.put(
        f"/api/products/{created['id']}",
        json={**widget, "name": "Renamed", "price": 12.5},
    )
    assert resp.status_code == 200
    assert resp.json()["name"] == "Renamed"
    assert resp.json()["price"] == 12.5

    assert len(_movements(client, created["id"])) == 1


def test_update_missing_product(client, widget):
    resp = client.put("/api/products/4242", json=widget)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Product not found"}


def test_update_to_existing_sku_is_a_conflict(client, create_product, widget):
    create_product(sku="TAKEN")
    other = create_product(sku="FREE")

    resp = client.put(
        f"/api/products/{other['id']}",
        json={**widget, "sku": "TAKEN", "stock": 1},
    )
    assert resp.status_code == 400

    # rolled back: no adjustment movement, stock untouched
    assert len(_movements(client, other["id"])) == 1
    assert client.get(f"/api/products/{other['id']}").json()["sku"] == "FREE"


def test_delete_product(client, create_product):
    product = create_product()

    resp = client.delete(f"/api/products/{product['id']}")
    assert resp.status_code == 200
    assert "message" in resp.json()

    assert client.get(f"/api/products/{product['id']}").status_code == 404
    assert client.delete(f"/api/products/{product['id']}").status_code == 404


def test_movements_for_missing_product(client):
    resp = client.get("/api/products/77/movements")
    assert resp.status_code == 404


def test_failed_movement_insert_rolls_back_product(client, widget, monkeypatch):
    async def broken_recorder(tx, **kwargs):
        raise DatabaseError("movement insert failed")

    monkeypatch.setattr(product_service, "record_initial_stock", broken_recorder)

    resp = client.post("/api/products", json=widget)
    assert resp.status_code == 500
    assert client.get("/api/products").json() == []
