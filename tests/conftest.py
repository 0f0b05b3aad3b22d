import os

# must be set before the app modules read their configuration
os.environ["APP_ENV"] = "development"
os.environ["DB_TYPE"] = "sqlite"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from main import create_app


@pytest.fixture
def database_url(tmp_path):
    """A fresh SQLite file per test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'inventory.db'}"


@pytest.fixture
def client(database_url):
    """TestClient with the lifespan running (tables created on startup)."""
    with TestClient(create_app(database_url)) as c:
        yield c


@pytest.fixture
def widget():
    return {
        "name": "Widget",
        "sku": "W1",
        "description": "Small widget",
        "price": 9.99,
        "stock": 10,
        "min_stock": 2,
        "image_url": None,
    }


@pytest.fixture
def create_product(client):
    def _create(**overrides):
        payload = {
            "name": "Widget",
            "sku": "W1",
            "price": 9.99,
            "stock": 10,
            "min_stock": 2,
        }
        payload.update(overrides)
        resp = client.post("/api/products", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create
