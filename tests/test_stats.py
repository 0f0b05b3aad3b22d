import re
from datetime import datetime, timedelta, timezone

from app.utils.date_utils import short_date_label


def test_stats_on_empty_dataset(client):
    resp = client.get("/api/stats")
    assert resp.status_code == 200, resp.text
    assert resp.json() == {
        "totalProducts": 0,
        "totalCategories": 0,
        "totalSuppliers": 0,
        "lowStockProducts": 0,
        "totalStockValue": 0.0,
        "recentMovements": [],
        "categoryDistribution": [],
        "stockTrends": [],
    }


def test_stats_report(client, create_product):
    tools = client.post("/api/categories", json={"name": "Tools"}).json()
    client.post("/api/categories", json={"name": "Garden"})
    client.post("/api/suppliers", json={"name": "ACME"})

    widget = create_product(sku="W1", price=9.99, stock=10, min_stock=2, category_id=tools["id"])
    create_product(sku="LOW", name="Bolt", price=2, stock=1, min_stock=5)

    client.put(
        f"/api/products/{widget['id']}",
        json={
            "name": "Widget",
            "sku": "W1",
            "price": 9.99,
            "stock": 7,
            "min_stock": 2,
            "category_id": tools["id"],
        },
    )

    body = client.get("/api/stats").json()

    assert body["totalProducts"] == 2
    assert body["totalCategories"] == 2
    assert body["totalSuppliers"] == 1
    assert body["lowStockProducts"] == 1
    assert abs(body["totalStockValue"] - (9.99 * 7 + 2 * 1)) < 0.001

    recent = body["recentMovements"]
    assert len(recent) == 3
    assert recent[0]["movement_type"] == "OUT"
    assert recent[0]["quantity"] == -3
    assert recent[0]["product_name"] == "Widget"

    assert body["categoryDistribution"] == [
        {"name": "Tools", "value": 1},
        {"name": "Garden", "value": 0},
    ]

    assert len(body["stockTrends"]) == 1
    today = body["stockTrends"][0]
    assert today["in"] == 11
    assert today["out"] == 3
    assert re.fullmatch(r"\d{1,2} [a-z]+", today["date"])


def test_recent_movements_capped_at_ten(client, create_product):
    for i in range(12):
        create_product(sku=f"SKU-{i}", stock=i + 1)

    recent = client.get("/api/stats").json()["recentMovements"]
    assert len(recent) == 10
    assert recent[0]["quantity"] == 12


BACKDATED_MOVEMENT = """
    INSERT INTO movimientos_stock (producto_id, cantidad, tipo_movimiento, notas, creado_en)
    VALUES (:product_id, :qty, :kind, 'backdated', datetime('now', :offset))
"""


def test_stock_trends_cover_last_seven_days(client, create_product):
    product = create_product(sku="T1", stock=5)
    db = client.app.state.db

    def backdate(qty, kind, days):
        client.portal.call(
            db.execute,
            BACKDATED_MOVEMENT,
            {"product_id": product["id"], "qty": qty, "kind": kind, "offset": f"-{days} days"},
        )

    backdate(100, "ENTRADA", 10)
    backdate(-4, "SALIDA", 6)
    backdate(2, "ENTRADA", 6)
    backdate(-1, "SALIDA", 3)

    today = datetime.now(timezone.utc).date()

    def label(days):
        return short_date_label(today - timedelta(days=days))

    trends = client.get("/api/stats").json()["stockTrends"]

    # the 10-day-old entry falls outside the window; oldest day first
    assert trends == [
        {"date": label(6), "in": 2, "out": 4},
        {"date": label(3), "in": 0, "out": 1},
        {"date": label(0), "in": 5, "out": 0},
    ]
