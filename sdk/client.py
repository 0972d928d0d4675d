# sdk/client.py
from typing import Any, Dict, Optional

import httpx
import requests

API_KEY_HEADER = "x-api-key"


class ProductClient:
    """Thin wrapper over the product API.

    ``session`` defaults to a ``requests.Session``; anything with the same
    ``get``/``post``/``put``/``delete`` interface (e.g. FastAPI's
    ``TestClient``) can be passed instead.  ``transport`` is handed to the
    ``httpx.AsyncClient`` used by the async calls.
    """

    def __init__(self, base_url: str = "http://localhost:3000", api_key: Optional[str] = None,
                 timeout: int = 10, session: Any = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport
        self.session = session if session is not None else requests.Session()
        if api_key:
            self.session.headers.update({API_KEY_HEADER: api_key})

    @property
    def products_url(self) -> str:
        return f"{self.base_url}/api/products"

    def hello(self) -> str:
        r = self.session.get(f"{self.base_url}/", timeout=self.timeout)
        r.raise_for_status()
        return r.text

    @staticmethod
    def _list_params(category: Optional[str], search: Optional[str],
                     page: Optional[int], limit: Optional[int]) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        if category:
            params["category"] = category
        if search:
            params["search"] = search
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        return params

    def list_products(self, category: Optional[str] = None, search: Optional[str] = None,
                      page: Optional[int] = None, limit: Optional[int] = None):
        params = self._list_params(category, search, page, limit)
        r = self.session.get(self.products_url, params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    async def list_products_async(self, category: Optional[str] = None, search: Optional[str] = None,
                                  page: Optional[int] = None, limit: Optional[int] = None):
        params = self._list_params(category, search, page, limit)
        headers = {API_KEY_HEADER: self.api_key} if self.api_key else {}
        async with httpx.AsyncClient(timeout=self.timeout, headers=headers,
                                     transport=self.transport) as client:
            r = await client.get(self.products_url, params=params)
            r.raise_for_status()
            return r.json()

    def get_product(self, product_id: str):
        r = self.session.get(f"{self.products_url}/{product_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def create_product(self, name: str, description: str, price: float, category: str, in_stock: bool = True):
        payload = {"name": name, "description": description, "price": price,
                   "category": category, "inStock": in_stock}
        r = self.session.post(self.products_url, json=payload, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def update_product(self, product_id: str, name: str, description: str, price: float,
                       category: str, in_stock: bool):
        payload = {"name": name, "description": description, "price": price,
                   "category": category, "inStock": in_stock}
        r = self.session.put(f"{self.products_url}/{product_id}", json=payload, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: str):
        r = self.session.delete(f"{self.products_url}/{product_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def stats(self):
        r = self.session.get(f"{self.products_url}/stats", timeout=self.timeout)
        r.raise_for_status()
        return r.json()
