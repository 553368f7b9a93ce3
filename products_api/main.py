# products_api/main.py
"""
FastAPI application for the in-memory products service.

Request pipeline, outermost first:

1. ``log_requests``      - logs every request line
2. ``require_api_key``   - rejects /api/products/* without the shared key
3. ``read_json_body``    - decodes the JSON body (dependency of write routes)
4. route dispatch        - the handlers in ``handlers.py``
5. exception handlers    - turn typed errors into ``{"error": message}``

Run with ``python -m products_api.main`` or ``uvicorn products_api.main:app``.
"""

import hmac
import json
import logging
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import handlers
from .config import Settings, load_settings
from .database import ProductStore
from .errors import DEFAULT_MESSAGE, ProductsError, UnauthorizedError, ValidationError
from .logging_config import setup_logging
from .models import Product, ProductPage

logger = logging.getLogger("products_api")

PRODUCTS_PREFIX = "/api/products"


# ---------------------------
# Error translation
# ---------------------------
def error_response(
    status_code: int, message: Optional[str], headers: Optional[Dict[str, str]] = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"error": message or DEFAULT_MESSAGE}, headers=headers
    )


async def products_error_handler(request: Request, exc: ProductsError) -> JSONResponse:
    logger.info("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
    return error_response(exc.status_code, exc.message)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unknown routes and wrong methods get the same envelope as our own errors.
    return error_response(exc.status_code, exc.detail, getattr(exc, "headers", None))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, DEFAULT_MESSAGE)


# ---------------------------
# Pipeline stages
# ---------------------------
async def log_requests(request: Request, call_next):
    url = request.url.path
    if request.url.query:
        url = f"{url}?{request.url.query}"
    logger.info("%s %s", request.method, url)
    response = await call_next(request)
    logger.debug("%s %s -> %d", request.method, url, response.status_code)
    return response


def _is_protected(path: str) -> bool:
    return path == PRODUCTS_PREFIX or path.startswith(PRODUCTS_PREFIX + "/")


async def require_api_key(request: Request, call_next):
    if _is_protected(request.url.path):
        settings: Settings = request.app.state.settings
        provided = request.headers.get(settings.api_key_header)
        if provided is None or not hmac.compare_digest(
            provided.encode("utf-8"), settings.api_key.encode("utf-8")
        ):
            exc = UnauthorizedError()
            logger.warning("Rejected %s %s: missing or wrong API key", request.method, request.url.path)
            return error_response(exc.status_code, exc.message)
    return await call_next(request)


def _reject_constant(token: str) -> Any:
    # NaN, Infinity and -Infinity are not JSON.
    raise ValidationError("Invalid JSON body")


async def read_json_body(request: Request) -> Any:
    raw = await request.body()
    if not raw:
        return {}
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        raise ValidationError("Invalid JSON body") from None


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


# ---------------------------
# Routes
# ---------------------------
root_router = APIRouter()
router = APIRouter(prefix=PRODUCTS_PREFIX)


@root_router.get("/", response_class=PlainTextResponse)
async def hello():
    return "Hello World"


@router.get("", response_model=ProductPage)
@router.get("/", response_model=ProductPage, include_in_schema=False)
async def list_products(
    category: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    store: ProductStore = Depends(get_store),
):
    return await handlers.list_products_logic(store, category, page, limit)


# search and stats are declared before /{product_id} so they are not
# captured as ids.
@router.get("/search", response_model=List[Product])
async def search_products(name: Optional[str] = None, store: ProductStore = Depends(get_store)):
    return await handlers.search_products_logic(store, name)


@router.get("/stats", response_model=Dict[str, int])
async def product_stats(store: ProductStore = Depends(get_store)):
    return await handlers.product_stats_logic(store)


@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
    return await handlers.get_product_logic(store, product_id)


@router.post("", response_model=Product, status_code=201)
@router.post("/", response_model=Product, status_code=201, include_in_schema=False)
async def create_product(payload: Any = Depends(read_json_body), store: ProductStore = Depends(get_store)):
    return await handlers.create_product_logic(store, payload)


@router.put("/{product_id}", response_model=Product)
async def update_product(
    product_id: str,
    payload: Any = Depends(read_json_body),
    store: ProductStore = Depends(get_store),
):
    return await handlers.update_product_logic(store, product_id, payload)


@router.delete("/{product_id}", status_code=204)
async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
    await handlers.delete_product_logic(store, product_id)
    return Response(status_code=204)


# ---------------------------
# Application factory
# ---------------------------
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.settings = settings
    app.state.store = ProductStore()

    # Starlette runs the most recently added middleware first.
    app.middleware("http")(require_api_key)
    app.middleware("http")(log_requests)

    app.add_exception_handler(ProductsError, products_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(root_router)
    app.include_router(router)
    return app


app = create_app()


def serve() -> None:
    settings: Settings = app.state.settings
    logger.info("Server listening on port %d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    serve()
