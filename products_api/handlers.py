# products_api/handlers.py
import logging
import re
import uuid
from typing import Any, Dict, List, Optional

from .core import _make_product_dict, validate_product
from .database import Product, ProductStore
from .errors import NotFoundError, ValidationError

# This file contains the logic behind every /api/products endpoint. Nothing
# in here knows about HTTP status codes; failures are raised as typed errors.

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_positive_int(raw: Optional[str], default: int) -> int:
    """Read the leading integer of ``raw`` ("2abc" -> 2).

    Missing, non-numeric, zero and negative values fall back to ``default``.
    """
    if raw is None:
        return default
    match = _LEADING_INT.match(raw)
    if not match:
        return default
    value = int(match.group(1))
    return value if value > 0 else default


# ---------------------------
# Read endpoints
# ---------------------------
async def list_products_logic(
    store: ProductStore,
    category: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> Dict[str, Any]:
    filtered = store.list()
    if category:
        wanted = category.lower()
        filtered = [p for p in filtered if p["category"].lower() == wanted]

    page_no = parse_positive_int(page, DEFAULT_PAGE)
    page_size = parse_positive_int(limit, DEFAULT_LIMIT)
    start = (page_no - 1) * page_size
    end = page_no * page_size

    return {
        "page": page_no,
        "limit": page_size,
        "total": len(filtered),
        "data": filtered[start:end],
    }


async def get_product_logic(store: ProductStore, product_id: str) -> Product:
    p = store.find_by_id(product_id)
    if p is None:
        raise NotFoundError("Product not found")
    return p


async def search_products_logic(store: ProductStore, name: Optional[str]) -> List[Product]:
    if not name:
        raise ValidationError("Missing required query parameter: name")
    term = name.lower()
    return [p for p in store.list() if term in p["name"].lower()]


async def product_stats_logic(store: ProductStore) -> Dict[str, int]:
    # Grouped by the raw category string; "Tools" and "tools" are two keys.
    stats: Dict[str, int] = {}
    for p in store.list():
        stats[p["category"]] = stats.get(p["category"], 0) + 1
    return stats


# ---------------------------
# Write endpoints
# ---------------------------
async def create_product_logic(store: ProductStore, payload: Any) -> Product:
    data = validate_product(payload)
    product = _make_product_dict(str(uuid.uuid4()), data)
    async with store.lock:
        store.append(product)
    logger.info("Created product %s (%s)", product["id"], product["name"])
    return product


async def update_product_logic(store: ProductStore, product_id: str, payload: Any) -> Product:
    # A bad body is reported even when the id does not exist.
    data = validate_product(payload)
    async with store.lock:
        index = store.find_index_by_id(product_id)
        if index is None:
            raise NotFoundError("Product not found")
        product = _make_product_dict(product_id, data)
        store.replace_at(index, product)
    logger.info("Updated product %s", product_id)
    return product


async def delete_product_logic(store: ProductStore, product_id: str) -> None:
    async with store.lock:
        index = store.find_index_by_id(product_id)
        if index is None:
            raise NotFoundError("Product not found")
        store.remove_at(index)
    logger.info("Deleted product %s", product_id)
