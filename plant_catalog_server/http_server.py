"""HTTP server for the plant catalog."""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, ValidationError

from .browser import CatalogBrowser
from .cart import CartStore
from .catalog_client import CatalogFetchError, PlantCatalogClient
from .config import configure_logging, load_settings
from .models import TreePledge
from .render import (
    CATEGORIES_FAILED,
    DETAILS_FAILED,
    DETAILS_NOT_AVAILABLE,
    NO_PLANTS,
    NO_PLANTS_IN_CATEGORY,
    PLANTS_FAILED,
    SUPERSEDED,
    format_pledge,
)

logger = logging.getLogger("plant-catalog-http-server")

# Global state
catalog_client: PlantCatalogClient
browser: CatalogBrowser
cart_store: CartStore


def build_catalog_client() -> PlantCatalogClient:
    """Create the catalog client from environment settings."""
    settings = load_settings()
    configure_logging(settings)
    return PlantCatalogClient(base_url=settings.base_url, timeout=settings.timeout)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    global catalog_client, browser, cart_store

    # Startup
    logger.info("Starting Plant Catalog HTTP Server...")
    catalog_client = build_catalog_client()
    browser = CatalogBrowser(catalog_client)
    cart_store = CartStore()

    yield

    # Shutdown
    logger.info("Shutting down Plant Catalog HTTP Server...")
    await catalog_client.aclose()


app = FastAPI(
    title="Plant Catalog Server",
    description="HTTP API for browsing the plant catalog and managing a cart",
    version="0.1.0",
    lifespan=lifespan,
)


# Request/Response Models
class AddToCartRequest(BaseModel):
    name: Any = None
    price: Any = None


class RemoveFromCartRequest(BaseModel):
    index: Any = None


class PledgeRequest(BaseModel):
    name: str = ""
    email: str = ""
    count: Any = 1


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Plant Catalog Server",
        "version": "0.1.0",
        "description": "HTTP API for browsing the plant catalog and managing a cart",
        "endpoints": {
            "docs": "/docs",
            "health": "/health",
            "catalog": {
                "categories": "GET /categories",
                "plants": "GET /plants?category_id=",
                "details": "GET /plants/{plant_id}",
            },
            "cart": {"get": "GET /cart", "add": "POST /cart/add", "remove": "POST /cart/remove"},
            "pledge": "POST /pledge",
        },
        "catalog_url": catalog_client.base_url,
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "cart_items": len(cart_store)}


# Catalog endpoints
@app.get("/categories")
async def list_categories():
    """List plant categories."""
    try:
        categories = await browser.load_categories()
    except CatalogFetchError:
        raise HTTPException(status_code=502, detail=CATEGORIES_FAILED)

    first = browser.first_selectable(categories)
    return {
        "count": len(categories),
        "categories": [category.model_dump() for category in categories],
        "default_category_id": first.id if first else None,
    }


@app.get("/plants")
async def list_plants(category_id: Optional[str] = None):
    """List all plants, or the plants of one category."""
    try:
        if category_id:
            plants = await browser.load_plants_by_category(category_id)
        else:
            plants = await browser.load_all_plants()
    except CatalogFetchError:
        raise HTTPException(status_code=502, detail=PLANTS_FAILED)

    if plants is None:
        raise HTTPException(status_code=409, detail=SUPERSEDED)

    return {
        "category_id": category_id,
        "count": len(plants),
        "plants": [plant.model_dump() for plant in plants],
        "message": None if plants else (NO_PLANTS_IN_CATEGORY if category_id else NO_PLANTS),
    }


@app.get("/plants/{plant_id}")
async def get_plant(plant_id: str):
    """Get the details of a single plant."""
    try:
        result = await browser.load_plant_details(plant_id)
    except CatalogFetchError:
        raise HTTPException(status_code=502, detail=DETAILS_FAILED)

    if result is None:
        raise HTTPException(status_code=409, detail=SUPERSEDED)
    if not result.found:
        raise HTTPException(status_code=404, detail=DETAILS_NOT_AVAILABLE)
    return result.record.model_dump()


# Cart endpoints
def _cart_response() -> dict[str, Any]:
    state = cart_store.get_state()
    return {**state.model_dump(), "item_count": state.item_count}


@app.get("/cart")
async def get_cart():
    """Get current shopping cart."""
    return _cart_response()


@app.post("/cart/add")
async def add_to_cart(request: AddToCartRequest):
    """Add a plant to the cart."""
    cart_store.add(request.name, request.price)
    return _cart_response()


@app.post("/cart/remove")
async def remove_from_cart(request: RemoveFromCartRequest):
    """Remove the cart entry at a position; unknown positions are ignored."""
    cart_store.remove(request.index)
    return _cart_response()


@app.post("/pledge")
async def pledge_trees(request: PledgeRequest):
    """Pledge to plant trees."""
    try:
        pledge = TreePledge.from_form(request.name, request.email, request.count)
    except ValidationError:
        raise HTTPException(status_code=400, detail="A name is required to pledge trees")

    logger.info(f"Pledge: {pledge.count} tree(s) from {pledge.email}")
    return {"success": True, "message": format_pledge(pledge), "pledge": pledge.model_dump()}


def run_http_server(host: str = "0.0.0.0", port: int = 8000):
    """Run the HTTP server."""
    import uvicorn

    uvicorn.run(app, host=host, port=port, log_level="info")


if __name__ == "__main__":
    run_http_server()
