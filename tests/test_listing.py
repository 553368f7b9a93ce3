# tests/test_listing.py
import pytest


def _names(body):
    return [p["name"] for p in body["data"]]


def test_empty_store_lists_empty_page(client):
    r = client.get("/api/products")
    assert r.status_code == 200
    assert r.json() == {"page": 1, "limit": 10, "total": 0, "data": []}


def test_default_page_is_first_ten_in_insertion_order(client, make_product):
    for i in range(12):
        make_product(name=f"p{i}")
    body = client.get("/api/products").json()
    assert body["page"] == 1
    assert body["limit"] == 10
    assert body["total"] == 12
    assert _names(body) == [f"p{i}" for i in range(10)]


def test_pages_reconstruct_the_sequence(client, make_product):
    for i in range(7):
        make_product(name=f"p{i}")
    seen = []
    for page in range(1, 5):
        body = client.get("/api/products", params={"page": page, "limit": 3}).json()
        assert body["total"] == 7
        assert len(body["data"]) <= 3
        seen.extend(_names(body))
    assert seen == [f"p{i}" for i in range(7)]


def test_page_past_the_end_is_empty_not_an_error(client, make_product):
    make_product()
    body = client.get("/api/products", params={"page": 5}).json()
    assert body["data"] == []
    assert body["total"] == 1


@pytest.mark.parametrize("raw, expected", [
    ("abc", 1),
    ("0", 1),
    ("-3", 1),
    ("", 1),
    ("2abc", 2),
    ("3", 3),
])
def test_page_parsing(client, raw, expected):
    body = client.get("/api/products", params={"page": raw}).json()
    assert body["page"] == expected


@pytest.mark.parametrize("raw, expected", [
    ("lots", 10),
    ("0", 10),
    ("-5", 10),
    ("", 10),
    ("2abc", 2),
    ("4", 4),
])
def test_limit_parsing(client, raw, expected):
    body = client.get("/api/products", params={"limit": raw}).json()
    assert body["limit"] == expected


def test_category_filter_is_case_insensitive_and_total_is_filtered(client, make_product):
    make_product(name="hammer", category="Tools")
    make_product(name="mug", category="Kitchen")
    make_product(name="saw", category="tools")
    make_product(name="drill", category="TOOLS")

    body = client.get("/api/products", params={"category": "tools", "limit": 2}).json()
    assert body["total"] == 3
    assert _names(body) == ["hammer", "saw"]

    body = client.get("/api/products", params={"category": "tOOls", "page": 2, "limit": 2}).json()
    assert _names(body) == ["drill"]


def test_unknown_category_gives_empty_data(client, make_product):
    make_product(category="Tools")
    body = client.get("/api/products", params={"category": "garden"}).json()
    assert body["total"] == 0
    assert body["data"] == []
