# products_api/database.py
import asyncio
from typing import Any, Dict, List, Optional

# The in-memory product store. One instance per application; nothing here
# survives a restart.

Product = Dict[str, Any]


class ProductStore:
    def __init__(self) -> None:
        self._products: List[Product] = []
        # Held by handlers across find_index_by_id -> replace_at/remove_at.
        self.lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._products)

    def list(self) -> List[Product]:
        """Current contents in insertion order. Callers must not mutate it."""
        return self._products

    def find_by_id(self, product_id: str) -> Optional[Product]:
        for p in self._products:
            if p["id"] == product_id:
                return p
        return None

    def find_index_by_id(self, product_id: str) -> Optional[int]:
        for i, p in enumerate(self._products):
            if p["id"] == product_id:
                return i
        return None

    def append(self, product: Product) -> None:
        self._products.append(product)

    def replace_at(self, index: int, product: Product) -> None:
        self._products[index] = product

    def remove_at(self, index: int) -> None:
        del self._products[index]

    def clear(self) -> None:
        self._products.clear()
