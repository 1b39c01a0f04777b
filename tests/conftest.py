# tests/conftest.py
"""
Fixtures compartidas: almacenamiento en memoria y un backend HTTP falso
montado sobre httpx.MockTransport.
"""

import json
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest

from storefront.api.client import ApiClient
from storefront.db.storage import MemoryStorage
from storefront.db.token_store import TokenStore
from storefront.schemas.product_schema import ProductResponse

BASE_URL = "http://testserver/api"


class FakeBackend:
    """
    Backend REST falso. Se registran respuestas por (método, ruta) y se
    guardan todas las peticiones recibidas para inspeccionarlas.
    """

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, path: str, json_body: Any = None, status: int = 200,
            handler: Optional[Callable[[httpx.Request], httpx.Response]] = None) -> None:
        if handler is None:
            def handler(request, _body=json_body, _status=status):
                if _body is None:
                    return httpx.Response(_status)
                return httpx.Response(_status, json=_body)
        self.routes[(method.upper(), path)] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api")
        handler = self.routes.get((request.method, path))
        if handler is None:
            return httpx.Response(404, json={"message": f"No route for {request.method} {path}"})
        return handler(request)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def token_store(storage):
    return TokenStore(storage)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
async def api_client(backend, token_store):
    client = ApiClient(BASE_URL, token_store, timeout=5.0, transport=httpx.MockTransport(backend))
    yield client
    await client.aclose()


def make_product(product_id: str = "p1", price: int = 1000, **overrides) -> ProductResponse:
    data = {
        "id": product_id,
        "name": f"Producto {product_id}",
        "price": price,
        "images": [f"https://cdn.example.com/{product_id}.jpg"],
        "categoryId": "c1",
        "stock": 10,
        "isActive": True,
    }
    data.update(overrides)
    return ProductResponse.model_validate(data)


def product_json(product_id: str = "p1", price: int = 1000) -> Dict[str, Any]:
    return {
        "id": product_id,
        "name": f"Producto {product_id}",
        "price": price,
        "images": [],
        "createdAt": "2024-05-01T10:00:00Z",
        "updatedAt": "2024-05-01T10:00:00Z",
    }
