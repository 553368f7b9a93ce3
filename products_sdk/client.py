# products_sdk/client.py
import uuid
from typing import Any, Dict, List, Optional, Union

import httpx
import requests

Number = Union[int, float]


class ProductsApiError(Exception):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}")


def _product_payload(name: str, description: str, price: Number, category: str, in_stock: bool) -> Dict[str, Any]:
    return {
        "name": name,
        "description": description,
        "price": price,
        "category": category,
        "inStock": in_stock,
    }


def _check(r) -> Any:
    """Return the decoded body of a 2xx response, raise ProductsApiError otherwise."""
    if r.status_code >= 400:
        try:
            message = r.json().get("error", r.text)
        except ValueError:
            message = r.text
        raise ProductsApiError(r.status_code, message)
    if r.status_code == 204 or not r.content:
        return None
    content_type = r.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        return r.json()
    return r.text


class ProductsClient:
    """Small synchronous client for the products API.

    ``session`` defaults to a ``requests.Session``; anything with the same
    ``get/post/put/delete`` surface (e.g. FastAPI's ``TestClient``) works.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        api_key: Optional[str] = "mysecretapikey",
        timeout: int = 10,
        session: Optional[Any] = None,
        api_key_header: str = "x-api-key",
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.api_key = api_key
        self.api_key_header = api_key_header
        if api_key:
            self.session.headers.update({api_key_header: api_key})

    @property
    def products_url(self) -> str:
        return f"{self.base_url}/api/products"

    def hello(self) -> str:
        return _check(self.session.get(f"{self.base_url}/", timeout=self.timeout))

    # Listing
    def list_products(self, category: Optional[str] = None, page: Optional[int] = None, limit: Optional[int] = None):
        params: Dict[str, Any] = {}
        if category:
            params["category"] = category
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        r = self.session.get(self.products_url, params=params, timeout=self.timeout)
        return _check(r)

    def iter_products(self, category: Optional[str] = None, limit: int = 50):
        """Walk every page of the listing and yield products in store order."""
        page = 1
        while True:
            body = self.list_products(category=category, page=page, limit=limit)
            yield from body["data"]
            if page * limit >= body["total"]:
                return
            page += 1

    def search_products(self, name: str) -> List[Dict[str, Any]]:
        r = self.session.get(f"{self.products_url}/search", params={"name": name}, timeout=self.timeout)
        return _check(r)

    def stats(self) -> Dict[str, int]:
        return _check(self.session.get(f"{self.products_url}/stats", timeout=self.timeout))

    def get_product(self, product_id: str) -> Dict[str, Any]:
        return _check(self.session.get(f"{self.products_url}/{product_id}", timeout=self.timeout))

    # Writes
    def create_product(self, name: str, description: str, price: Number, category: str, in_stock: bool = True):
        payload = _product_payload(name, description, price, category, in_stock)
        r = self.session.post(self.products_url, json=payload, timeout=self.timeout)
        return _check(r)

    def update_product(
        self, product_id: str, name: str, description: str, price: Number, category: str, in_stock: bool
    ):
        payload = _product_payload(name, description, price, category, in_stock)
        r = self.session.put(f"{self.products_url}/{product_id}", json=payload, timeout=self.timeout)
        return _check(r)

    def delete_product(self, product_id: str) -> None:
        _check(self.session.delete(f"{self.products_url}/{product_id}", timeout=self.timeout))

    # Async variants (used by demo_concurrent.py)
    def _async_client(self) -> httpx.AsyncClient:
        headers = {self.api_key_header: self.api_key} if self.api_key else {}
        return httpx.AsyncClient(base_url=self.base_url, headers=headers, timeout=self.timeout)

    async def create_product_async(
        self,
        name: str,
        description: str,
        price: Number,
        category: str,
        in_stock: bool = True,
        client: Optional[httpx.AsyncClient] = None,
    ):
        payload = _product_payload(name, description, price, category, in_stock)
        if client is not None:
            return _check(await client.post("/api/products", json=payload))
        async with self._async_client() as ac:
            return _check(await ac.post("/api/products", json=payload))

    async def delete_product_async(self, product_id: str, client: Optional[httpx.AsyncClient] = None) -> None:
        if client is not None:
            _check(await client.delete(f"/api/products/{product_id}"))
            return
        async with self._async_client() as ac:
            _check(await ac.delete(f"/api/products/{product_id}"))


def random_product_name(prefix: str = "item") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}"
