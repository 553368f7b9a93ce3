# tests/test_auth.py
import pytest
from fastapi.testclient import TestClient

from products_api.config import Settings
from products_api.main import create_app

UNAUTHORIZED = {"error": "Unauthorized: Invalid or missing API key"}
PEN = {"name": "Pen", "description": "Blue ink", "price": 1.5, "category": "Stationery", "inStock": True}


@pytest.mark.parametrize("method, path", [
    ("get", "/api/products"),
    ("get", "/api/products/search?name=pen"),
    ("get", "/api/products/stats"),
    ("get", "/api/products/anything"),
    ("put", "/api/products/anything"),
    ("delete", "/api/products/anything"),
    ("patch", "/api/products/anything"),
])
def test_missing_key_is_401(anon_client, method, path):
    r = anon_client.request(method.upper(), path)
    assert r.status_code == 401
    assert r.json() == UNAUTHORIZED


def test_wrong_key_is_401_and_store_untouched(anon_client, store, make_product):
    pid = make_product()["id"]
    headers = {"x-api-key": "wrong"}

    assert anon_client.post("/api/products", json=PEN, headers=headers).status_code == 401
    assert anon_client.put(f"/api/products/{pid}", json={**PEN, "name": "Hacked"}, headers=headers).status_code == 401
    assert anon_client.delete(f"/api/products/{pid}", headers=headers).status_code == 401

    assert len(store) == 1
    assert store.find_by_id(pid)["name"] == "Pen"


def test_auth_runs_before_body_parsing(anon_client):
    r = anon_client.post("/api/products", content=b"{broken", headers={"content-type": "application/json"})
    assert r.status_code == 401


def test_prefix_match_is_path_segment_based(anon_client):
    # Not under /api/products, so no key is needed; it is simply unknown.
    r = anon_client.get("/api/productsextra")
    assert r.status_code == 404
    assert r.json() == {"error": "Not Found"}


def test_key_and_header_name_come_from_settings():
    app = create_app(Settings(api_key="s3cret", api_key_header="x-token"))
    c = TestClient(app)
    assert c.get("/api/products", headers={"x-api-key": "mysecretapikey"}).status_code == 401
    assert c.get("/api/products", headers={"x-token": "s3cret"}).status_code == 200
