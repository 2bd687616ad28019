"""Shared fixtures and sample catalog payloads."""

from typing import Any, Callable

import httpx
import pytest

from plant_catalog_server.cart import CartStore
from plant_catalog_server.catalog_client import PlantCatalogClient

# Shapes observed from the catalog API
CATEGORIES_PAYLOAD = {
    "status": True,
    "message": "all categories fetched",
    "categories": [
        {"id": 1, "category_name": "Fruit Tree", "small_description": "Trees that bear fruit"},
        {"id": 2, "category_name": "Flowering Tree"},
        {"category": "Mystery Tree"},
    ],
}

ALL_PLANTS_PAYLOAD = {
    "status": True,
    "plants": [
        {
            "id": 1,
            "image": "https://i.ibb.co/mango.jpg",
            "name": "Mango Tree",
            "description": "A fast-growing tropical tree that produces delicious, juicy mangoes.",
            "category": "Fruit Tree",
            "price": 500,
        },
        {
            "_id": "n-2",
            "img": "https://i.ibb.co/neem.jpg",
            "title": "Neem Tree",
            "short_description": "Medicinal tree",
            "category_name": "Medicinal Tree",
            "cost": "300",
        },
    ],
}

FRUIT_PLANTS_PAYLOAD = {
    "status": True,
    "data": [
        {"plant_id": 7, "name": "Guava Tree", "thumbnail": "guava.jpg", "category": "Fruit Tree", "price": 350},
    ],
}

EMPTY_CATEGORY_PAYLOAD = {"status": False, "message": "no plant found"}

PLANT_DETAIL_PAYLOAD = {
    "status": True,
    "plants": {
        "id": 1,
        "image": "https://i.ibb.co/mango.jpg",
        "name": "Mango Tree",
        "description": "A fast-growing tropical tree.",
        "category": "Fruit Tree",
        "price": 500,
    },
}

API_PREFIX = "/api"


def make_transport(routes: dict[str, Any]) -> httpx.MockTransport:
    """Serve canned JSON (or prepared responses) by request path."""

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.startswith(API_PREFIX):
            path = path[len(API_PREFIX):]
        if path not in routes:
            return httpx.Response(404, json={"status": False, "message": "not found"})
        value = routes[path]
        if isinstance(value, httpx.Response):
            return value
        if isinstance(value, Exception):
            raise value
        return httpx.Response(200, json=value)

    return httpx.MockTransport(handler)


@pytest.fixture
def catalog_routes() -> dict[str, Any]:
    """Default route table; tests may add or replace entries."""
    return {
        "/categories": CATEGORIES_PAYLOAD,
        "/plants": ALL_PLANTS_PAYLOAD,
        "/category/1": FRUIT_PLANTS_PAYLOAD,
        "/category/2": EMPTY_CATEGORY_PAYLOAD,
        "/plant/1": PLANT_DETAIL_PAYLOAD,
        "/plant/404": {"status": False, "message": "no plant"},
    }


@pytest.fixture
def catalog_client(catalog_routes: dict[str, Any]) -> PlantCatalogClient:
    return PlantCatalogClient(transport=make_transport(catalog_routes))


@pytest.fixture
def client_factory() -> Callable[[dict[str, Any]], PlantCatalogClient]:
    def factory(routes: dict[str, Any]) -> PlantCatalogClient:
        return PlantCatalogClient(transport=make_transport(routes))

    return factory


@pytest.fixture
def cart() -> CartStore:
    return CartStore()
