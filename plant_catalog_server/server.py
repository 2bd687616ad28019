"""MCP Server for the plant catalog."""

import asyncio
import logging
from typing import Any

from mcp.server import Server
from mcp.types import Resource, TextContent, Tool
from pydantic import AnyUrl, ValidationError

from .browser import CatalogBrowser
from .cart import CartStore
from .catalog_client import CatalogFetchError, PlantCatalogClient
from .config import configure_logging, load_settings
from .models import TreePledge
from .render import (
    CATEGORIES_FAILED,
    DETAILS_FAILED,
    NO_PLANTS,
    NO_PLANTS_IN_CATEGORY,
    PLANTS_FAILED,
    SUPERSEDED,
    CartView,
    format_cart,
    format_categories,
    format_plant_details,
    format_plants,
    format_pledge,
)

logger = logging.getLogger("plant-catalog-mcp-server")

# Initialize server
app = Server("plant-catalog-mcp-server")

# Global state
catalog_client: PlantCatalogClient
browser: CatalogBrowser
cart_store: CartStore
cart_view: CartView


def init_state(client: PlantCatalogClient) -> None:
    """Create the browser and the session cart around a catalog client."""
    global catalog_client, browser, cart_store, cart_view

    catalog_client = client
    browser = CatalogBrowser(client)
    cart_store = CartStore()
    cart_view = CartView()
    cart_store.subscribe(cart_view)


def _text(text: str) -> list[TextContent]:
    return [TextContent(type="text", text=text)]


@app.list_resources()
async def list_resources() -> list[Resource]:
    """List available resources."""
    return [
        Resource(
            uri=AnyUrl("plants://cart"),
            name="Shopping Cart",
            mimeType="application/json",
            description="Current shopping cart contents",
        ),
    ]


@app.read_resource()
async def read_resource(uri: AnyUrl) -> str:
    """Read a resource by URI."""
    if str(uri) == "plants://cart":
        return cart_store.get_state().model_dump_json(indent=2)

    raise ValueError(f"Unknown resource: {uri}")


@app.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="plants_list_categories",
            description="List plant categories",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="plants_list",
            description="List plants, optionally only those of one category",
            inputSchema={
                "type": "object",
                "properties": {
                    "category_id": {
                        "type": "string",
                        "description": "Category ID (omit to list all plants)",
                    },
                },
            },
        ),
        Tool(
            name="plants_get_details",
            description="Get the details of a single plant",
            inputSchema={
                "type": "object",
                "properties": {
                    "plant_id": {
                        "type": "string",
                        "description": "Plant ID",
                    },
                },
                "required": ["plant_id"],
            },
        ),
        Tool(
            name="plants_add_to_cart",
            description="Add a plant to the shopping cart",
            inputSchema={
                "type": "object",
                "properties": {
                    "name": {
                        "type": "string",
                        "description": "Plant name",
                    },
                    "price": {
                        "type": ["number", "string"],
                        "description": "Plant price",
                    },
                },
                "required": ["name", "price"],
            },
        ),
        Tool(
            name="plants_remove_from_cart",
            description="Remove the cart entry at a position (as shown by plants_get_cart)",
            inputSchema={
                "type": "object",
                "properties": {
                    "index": {
                        "type": "integer",
                        "description": "Zero-based position in the cart",
                    },
                },
                "required": ["index"],
            },
        ),
        Tool(
            name="plants_get_cart",
            description="Get current shopping cart contents with all items and total",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="plants_pledge_trees",
            description="Pledge to plant trees",
            inputSchema={
                "type": "object",
                "properties": {
                    "name": {"type": "string", "description": "Your name"},
                    "email": {"type": "string", "description": "Contact email"},
                    "count": {
                        "type": "integer",
                        "description": "Number of trees (default: 1)",
                        "default": 1,
                    },
                },
                "required": ["name", "email"],
            },
        ),
    ]


@app.call_tool()
async def call_tool(name: str, arguments: Any) -> list[TextContent]:
    """Handle tool calls."""
    arguments = arguments or {}
    try:
        if name == "plants_list_categories":
            try:
                categories = await browser.load_categories()
            except CatalogFetchError:
                return _text(CATEGORIES_FAILED)
            return _text(format_categories(categories))

        elif name == "plants_list":
            category_id = arguments.get("category_id")
            try:
                if category_id:
                    plants = await browser.load_plants_by_category(category_id)
                    empty_message = NO_PLANTS_IN_CATEGORY
                else:
                    plants = await browser.load_all_plants()
                    empty_message = NO_PLANTS
            except CatalogFetchError:
                return _text(PLANTS_FAILED)

            if plants is None:
                return _text(SUPERSEDED)
            return _text(format_plants(plants, empty_message))

        elif name == "plants_get_details":
            try:
                result = await browser.load_plant_details(arguments["plant_id"])
            except CatalogFetchError:
                return _text(DETAILS_FAILED)

            if result is None:
                return _text(SUPERSEDED)
            return _text(format_plant_details(result.record))

        elif name == "plants_add_to_cart":
            state = cart_store.add(arguments.get("name"), arguments.get("price"))
            item = state.items[-1]
            return _text(f"Added {item.name} (${item.price}) to cart\n\n{cart_view.text}")

        elif name == "plants_remove_from_cart":
            index = arguments.get("index")
            before = len(cart_store)
            cart_store.remove(index)
            if len(cart_store) == before:
                return _text(f"No cart entry at position {index}\n\n{cart_view.text}")
            return _text(f"Removed cart entry {index}\n\n{cart_view.text}")

        elif name == "plants_get_cart":
            return _text(format_cart(cart_store.get_state()))

        elif name == "plants_pledge_trees":
            try:
                pledge = TreePledge.from_form(
                    arguments.get("name"), arguments.get("email"), arguments.get("count")
                )
            except ValidationError:
                return _text("Error: A name is required to pledge trees.")
            logger.info(f"Pledge: {pledge.count} tree(s) from {pledge.email}")
            return _text(format_pledge(pledge))

        else:
            return _text(f"Unknown tool: {name}")

    except Exception as e:
        logger.error(f"Error executing tool {name}: {e}", exc_info=True)
        return _text(f"Error: {str(e)}")


async def main() -> None:
    """Main entry point for the MCP server."""
    settings = load_settings()
    configure_logging(settings)

    init_state(PlantCatalogClient(base_url=settings.base_url, timeout=settings.timeout))

    logger.info(f"Starting Plant Catalog MCP Server against {settings.base_url}...")

    from mcp.server.stdio import stdio_server

    try:
        async with stdio_server() as (read_stream, write_stream):
            await app.run(
                read_stream,
                write_stream,
                app.create_initialization_options(),
            )
    finally:
        await catalog_client.aclose()


if __name__ == "__main__":
    asyncio.run(main())
