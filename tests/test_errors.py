# tests/test_errors.py
from fastapi.testclient import TestClient

from products_api import handlers
from products_api.errors import (
    STATUS_BY_KIND,
    ErrorKind,
    NotFoundError,
    ProductsError,
    UnauthorizedError,
    ValidationError,
)


def test_kind_to_status_table():
    assert NotFoundError().status_code == 404
    assert ValidationError().status_code == 400
    assert UnauthorizedError().status_code == 401
    assert ProductsError().status_code == 500
    assert set(STATUS_BY_KIND) == set(ErrorKind)


def test_default_messages():
    assert NotFoundError().message == "Product not found"
    assert ValidationError().message == "Invalid product data"
    assert ProductsError().message == "Internal Server Error"


def test_unhandled_exception_becomes_500(app, settings, monkeypatch):
    async def boom(store):
        raise RuntimeError("kaboom")

    monkeypatch.setattr(handlers, "product_stats_logic", boom)
    c = TestClient(app, raise_server_exceptions=False)
    r = c.get("/api/products/stats", headers={"x-api-key": settings.api_key})
    assert r.status_code == 500
    assert r.json() == {"error": "Internal Server Error"}


def test_generic_typed_error_renders_500_with_message(app, client, monkeypatch):
    async def fail(store):
        raise ProductsError("store offline")

    monkeypatch.setattr(handlers, "product_stats_logic", fail)
    r = client.get("/api/products/stats")
    assert r.status_code == 500
    assert r.json() == {"error": "store offline"}


def test_unknown_route_uses_error_envelope(client):
    r = client.get("/nowhere")
    assert r.status_code == 404
    assert r.json() == {"error": "Not Found"}


def test_wrong_method_uses_error_envelope(client):
    r = client.post("/api/products/stats")
    assert r.status_code == 405
    assert r.json() == {"error": "Method Not Allowed"}


def test_wrong_method_keeps_allow_header(client):
    r = client.post("/api/products/stats")
    assert r.status_code == 405
    assert "GET" in r.headers["allow"]
