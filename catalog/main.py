# catalog/main.py
import logging
from typing import Optional

from fastapi import APIRouter, FastAPI, Header, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, settings
from .core import ProductIn, ProductUpdate
from .database import ProductStore
from .errors import CatalogError, Outcome, error_envelope, first_error, route_not_found_envelope
from .logging_config import setup_logging
from .logic import (
    list_products_logic, search_products_logic, product_stats_logic, get_product_logic,
    create_product_logic, update_product_logic, delete_product_logic,
)
from .middleware import (
    check_api_key, log_requests, original_url, read_json_body, validate_product_payload,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# ---------------------------
# Response mapping
# ---------------------------
def error_response(exc: BaseException) -> JSONResponse:
    if isinstance(exc, CatalogError):
        logger.warning("Error: %s: %s", exc.name, exc.message)
    else:
        logger.error("Error: unhandled %s", type(exc).__name__, exc_info=exc)
    body = error_envelope(exc)
    return JSONResponse(body, status_code=body["error"]["statusCode"])

def render_outcome(outcome: Outcome) -> JSONResponse:
    if isinstance(outcome, CatalogError):
        return error_response(outcome)
    return JSONResponse(outcome.value, status_code=outcome.status_code)

async def catalog_error_handler(request: Request, exc: CatalogError):
    return error_response(exc)

async def unexpected_error_handler(request: Request, exc: Exception):
    return error_response(exc)

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # unmatched path or unmatched method on a known path
    if exc.status_code in (404, 405):
        return JSONResponse(route_not_found_envelope(original_url(request)), status_code=404)
    err = CatalogError(str(exc.detail))
    err.status_code = exc.status_code
    return error_response(err)

def _store(request: Request) -> ProductStore:
    return request.app.state.store

def _api_key(request: Request) -> str:
    return request.app.state.settings.api_key

# ---------------------------
# Root
# ---------------------------
@router.get("/", response_class=PlainTextResponse)
async def root():
    return "Welcome to the Product API! Go to /api/products to see all products."

# ---------------------------
# Product endpoints
# Literal paths (/search, /stats) are registered before /{product_id}.
# ---------------------------
@router.get("/api/products")
async def list_products(
    request: Request,
    category: Optional[str] = None,
    in_stock: Optional[str] = Query(None, alias="inStock"),
    page: Optional[str] = None,
    limit: Optional[str] = None,
):
    return render_outcome(list_products_logic(_store(request), category, in_stock, page, limit))

@router.get("/api/products/search")
async def search_products(request: Request, q: Optional[str] = None):
    return render_outcome(search_products_logic(_store(request), q))

@router.get("/api/products/stats")
async def product_stats(request: Request):
    return render_outcome(product_stats_logic(_store(request)))

@router.get("/api/products/{product_id}")
async def get_product(product_id: str, request: Request):
    return render_outcome(get_product_logic(_store(request), product_id))

# ---------------------------
# Write endpoints (x-api-key required)
# ---------------------------
@router.post("/api/products")
async def create_product(request: Request, x_api_key: Optional[str] = Header(None)):
    body = await read_json_body(request)
    err = first_error(
        lambda: check_api_key(x_api_key, _api_key(request)),
        lambda: body if isinstance(body, CatalogError) else None,
        lambda: validate_product_payload(body),
    )
    if err is not None:
        return render_outcome(err)
    return render_outcome(create_product_logic(_store(request), ProductIn.model_validate(body)))

@router.put("/api/products/{product_id}")
async def update_product(product_id: str, request: Request, x_api_key: Optional[str] = Header(None)):
    body = await read_json_body(request)
    err = first_error(
        lambda: check_api_key(x_api_key, _api_key(request)),
        lambda: body if isinstance(body, CatalogError) else None,
        lambda: validate_product_payload(body, partial=True),
    )
    if err is not None:
        return render_outcome(err)
    return render_outcome(
        update_product_logic(_store(request), product_id, ProductUpdate.model_validate(body))
    )

@router.delete("/api/products/{product_id}")
async def delete_product(product_id: str, request: Request, x_api_key: Optional[str] = Header(None)):
    err = check_api_key(x_api_key, _api_key(request))
    if err is not None:
        return render_outcome(err)
    return render_outcome(delete_product_logic(_store(request), product_id))

# ---------------------------
# App factory
# ---------------------------
def create_app(app_settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    app_settings = app_settings or settings
    setup_logging(app_settings.log_level)

    app = FastAPI(title="product-catalog (in-memory)")
    app.state.settings = app_settings
    app.state.store = store if store is not None else ProductStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # outermost: must be added after every other middleware
    app.middleware("http")(log_requests)

    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    app.include_router(router)
    return app

app = create_app()
