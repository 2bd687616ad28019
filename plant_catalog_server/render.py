"""Text rendering of catalog records and cart state."""

from collections.abc import Iterable
from typing import Optional

from .models import CartState, CategoryRecord, ItemRecord, TreePledge

DESCRIPTION_PREVIEW_LENGTH = 120

ALL_CATEGORIES_LABEL = "All"
NO_PLANTS = "No plants to display."
NO_PLANTS_IN_CATEGORY = "No plants found in this category."
DETAILS_NOT_AVAILABLE = "Details not available"
EMPTY_CART = "Cart is empty"
CATEGORIES_FAILED = "Failed to load categories."
PLANTS_FAILED = "Failed to load plants."
DETAILS_FAILED = "Failed to load details."
SUPERSEDED = "A newer selection replaced this request."


def preview(text: str, length: int = DESCRIPTION_PREVIEW_LENGTH) -> str:
    """Shorten a description for a plant card."""
    if len(text) > length:
        return f"{text[:length]}..."
    return text


def format_categories(categories: Iterable[CategoryRecord]) -> str:
    """Format the category list, with the "All" entry first."""
    result_lines = ["Categories:\n", f"- {ALL_CATEGORIES_LABEL}"]
    for category in categories:
        if category.selectable:
            result_lines.append(f"- {category.label} (ID: {category.id})")
        else:
            result_lines.append(f"- {category.label} (not selectable)")
    return "\n".join(result_lines)


def format_plants(items: Iterable[ItemRecord], empty_message: str = NO_PLANTS) -> str:
    """Format plant cards."""
    items = list(items)
    if not items:
        return empty_message

    result_lines = [f"Found {len(items)} plant(s):\n"]
    for i, item in enumerate(items, 1):
        result_lines.append(f"\n{i}. {item.name}")
        if item.id is not None:
            result_lines.append(f"   ID: {item.id}")
        if item.description:
            result_lines.append(f"   {preview(item.description)}")
        result_lines.append(f"   Category: {item.category}")
        result_lines.append(f"   Price: ${item.price}")
        if item.image_url:
            result_lines.append(f"   Image: {item.image_url}")

    return "\n".join(result_lines)


def format_plant_details(record: Optional[ItemRecord]) -> str:
    """Format the detail view of a single plant."""
    if record is None:
        return DETAILS_NOT_AVAILABLE

    result_lines = [record.name]
    if record.image_url:
        result_lines.append(f"Image: {record.image_url}")
    if record.description:
        result_lines.append(f"\n{record.description}\n")
    result_lines.append(f"Category: {record.category}")
    result_lines.append(f"Price: ${record.price}")
    return "\n".join(result_lines)


def format_cart(state: CartState) -> str:
    """Format the cart with removal indices and the total."""
    if not state.items:
        return f"{EMPTY_CART}\nTotal: ${state.total}"

    result_lines = [f"Shopping Cart ({state.item_count} items):\n"]
    for index, item in enumerate(state.items):
        result_lines.append(f"[{index}] {item.name} - ${item.price}")

    result_lines.append(f"\n{'='*30}")
    result_lines.append(f"Total: ${state.total}")
    return "\n".join(result_lines)


def format_pledge(pledge: TreePledge) -> str:
    """Thank a user for a tree pledge."""
    return (
        f"Thanks {pledge.name}! You pledged to plant {pledge.count} tree(s). "
        f"We'll contact you at {pledge.email}."
    )


class CartView:
    """Cart listener that keeps the latest rendered cart text."""

    def __init__(self) -> None:
        self.text = format_cart(CartState())
        self.renders = 0

    def __call__(self, state: CartState) -> None:
        self.text = format_cart(state)
        self.renders += 1
