"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from products_api.config import Settings
from products_api.main import create_app

API_KEY = "test-key"


@pytest.fixture
def settings():
    return Settings(api_key=API_KEY, log_level="DEBUG")


@pytest.fixture
def app(settings):
    """A fresh application, and so a fresh empty store, per test."""
    return create_app(settings)


@pytest.fixture
def store(app):
    return app.state.store


@pytest.fixture
def client(app):
    c = TestClient(app)
    c.headers.update({"x-api-key": API_KEY})
    return c


@pytest.fixture
def anon_client(app):
    return TestClient(app)


@pytest.fixture
def make_product(client):
    def _make(name="Pen", description="Blue ink", price=1.5, category="Stationery", in_stock=True):
        r = client.post("/api/products", json={
            "name": name,
            "description": description,
            "price": price,
            "category": category,
            "inStock": in_stock,
        })
        assert r.status_code == 201, r.text
        return r.json()
    return _make
