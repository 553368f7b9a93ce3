# tests/test_store.py
from products_api.database import ProductStore


def _p(pid, name="x"):
    return {"id": pid, "name": name, "description": "", "price": 1, "category": "c", "inStock": True}


def test_new_store_is_empty():
    store = ProductStore()
    assert len(store) == 0
    assert store.list() == []
    assert store.find_by_id("a") is None
    assert store.find_index_by_id("a") is None


def test_append_keeps_insertion_order():
    store = ProductStore()
    for pid in ("a", "b", "c"):
        store.append(_p(pid))
    assert [p["id"] for p in store.list()] == ["a", "b", "c"]
    assert store.find_index_by_id("b") == 1
    assert store.find_by_id("c")["id"] == "c"


def test_replace_and_remove_at_index():
    store = ProductStore()
    for pid in ("a", "b", "c"):
        store.append(_p(pid))

    store.replace_at(1, _p("b", name="new"))
    assert store.find_by_id("b")["name"] == "new"
    assert store.find_index_by_id("b") == 1

    store.remove_at(0)
    assert [p["id"] for p in store.list()] == ["b", "c"]
    assert store.find_by_id("a") is None


def test_clear():
    store = ProductStore()
    store.append(_p("a"))
    store.clear()
    assert len(store) == 0
