# catalog_sdk/client.py
import requests
import httpx
from typing import Any, Dict, Optional


class CatalogAPIError(Exception):
    """Raised for any non-2xx response; carries the server's error envelope."""

    def __init__(self, status_code: int, name: str, message: str):
        super().__init__(f"{status_code} {name}: {message}")
        self.status_code = status_code
        self.name = name
        self.message = message


def _check(r) -> Any:
    is_json = "application/json" in r.headers.get("content-type", "")
    if r.status_code < 400:
        return r.json() if is_json else r.text
    err = r.json().get("error", {}) if is_json else {}
    raise CatalogAPIError(r.status_code, err.get("name", "Error"), err.get("message", r.text))


class CatalogClient:
    def __init__(self, base_url: str = "http://localhost:3000", api_key: Optional[str] = None,
                 timeout: int = 10, session=None):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        # any requests-compatible session works, e.g. fastapi.testclient.TestClient
        self.session = session if session is not None else requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _auth_headers(self) -> Dict[str, str]:
        return {"x-api-key": self.api_key} if self.api_key else {}

    def welcome(self) -> str:
        r = self.session.get(self._url("/"), timeout=self.timeout)
        return _check(r)

    # Reads
    def list_products(self, category: Optional[str] = None, in_stock: Optional[bool] = None,
                      page: Optional[int] = None, limit: Optional[int] = None):
        params = {}
        if category:
            params["category"] = category
        if in_stock is not None:
            params["inStock"] = "true" if in_stock else "false"
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        r = self.session.get(self._url("/api/products"), params=params, timeout=self.timeout)
        return _check(r)

    def search_products(self, q: str):
        r = self.session.get(self._url("/api/products/search"), params={"q": q}, timeout=self.timeout)
        return _check(r)

    def get_stats(self):
        r = self.session.get(self._url("/api/products/stats"), timeout=self.timeout)
        return _check(r)

    def get_product(self, product_id: str):
        r = self.session.get(self._url(f"/api/products/{product_id}"), timeout=self.timeout)
        return _check(r)

    # Writes (need api_key)
    def create_product(self, name: str, description: str, price: float, category: str,
                       in_stock: Optional[bool] = None):
        payload = {"name": name, "description": description, "price": price, "category": category}
        if in_stock is not None:
            payload["inStock"] = in_stock
        r = self.session.post(self._url("/api/products"), json=payload,
                              headers=self._auth_headers(), timeout=self.timeout)
        return _check(r)

    def update_product(self, product_id: str, **fields):
        # only the fields passed are sent; the server keeps the rest
        payload = {("inStock" if k == "in_stock" else k): v for k, v in fields.items()}
        r = self.session.put(self._url(f"/api/products/{product_id}"), json=payload,
                             headers=self._auth_headers(), timeout=self.timeout)
        return _check(r)

    def delete_product(self, product_id: str):
        r = self.session.delete(self._url(f"/api/products/{product_id}"),
                                headers=self._auth_headers(), timeout=self.timeout)
        return _check(r)

    # Async create (example)
    async def create_product_async(self, name: str, description: str, price: float, category: str,
                                   in_stock: Optional[bool] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        payload = {"name": name, "description": description, "price": price, "category": category}
        if in_stock is not None:
            payload["inStock"] = in_stock
        async with httpx.AsyncClient(timeout=self.timeout, transport=transport) as client:
            r = await client.post(self._url("/api/products"), json=payload, headers=self._auth_headers())
            return _check(r)
