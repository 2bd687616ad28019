"""
Normalization of plant catalog API responses.

The catalog API is not consistent about field names: listings arrive under
``categories``, ``plants`` or ``data`` depending on the endpoint, and the
same attribute may be called ``id``, ``_id`` or ``plant_id`` on different
items. Every payload goes through this module so the rest of the server only
ever sees :class:`CategoryRecord` and :class:`ItemRecord`.

None of the functions here raise. Unknown shapes resolve to an empty list,
a placeholder value or None.
"""

import logging
from collections.abc import Iterator, Mapping
from typing import Any, Optional

from .models import CategoryRecord, ItemRecord
from .values import UNNAMED_ITEM, coerce_identifier, coerce_price, coerce_text, first_present

logger = logging.getLogger(__name__)

# Container keys, in priority order.
LIST_CONTAINER_KEYS = ("categories", "plants", "data")
SINGLE_CONTAINER_KEYS = ("plants", "data", "plant")

# Category fields
CATEGORY_LABEL_KEYS = ("category_name", "category", "name")
CATEGORY_ID_KEYS = ("id", "category_id", "cat_id")

# Plant fields
ITEM_ID_KEYS = ("id", "_id", "plant_id")
ITEM_NAME_KEYS = ("name", "title")
ITEM_IMAGE_KEYS = ("image", "img", "thumbnail")
ITEM_DESCRIPTION_KEYS = ("description", "short_description", "long_description")
ITEM_CATEGORY_KEYS = ("category", "category_name")
ITEM_PRICE_KEYS = ("price", "cost")

ITEM_FIELD_KEYS = frozenset(
    ITEM_ID_KEYS
    + ITEM_NAME_KEYS
    + ITEM_IMAGE_KEYS
    + ITEM_DESCRIPTION_KEYS
    + ITEM_CATEGORY_KEYS
    + ITEM_PRICE_KEYS
)

UNKNOWN_CATEGORY_LABEL = "Unknown"


def extract_list(payload: Any) -> list:
    """
    Find the listing inside a response payload.

    Args:
        payload: Parsed JSON response

    Returns:
        The payload itself if it is a list, otherwise the first container
        value that is a list, otherwise an empty list
    """
    if isinstance(payload, list):
        return payload

    if isinstance(payload, Mapping):
        for key in LIST_CONTAINER_KEYS:
            value = payload.get(key)
            if isinstance(value, list):
                return value

    logger.debug(f"No listing found in payload of type {type(payload).__name__}")
    return []


def to_category_record(raw: Any) -> CategoryRecord:
    """Build a category record from one raw listing entry."""
    label = first_present(raw, CATEGORY_LABEL_KEYS, skip_empty=True)
    return CategoryRecord(
        id=coerce_identifier(first_present(raw, CATEGORY_ID_KEYS)),
        label=coerce_text(label, UNKNOWN_CATEGORY_LABEL) or UNKNOWN_CATEGORY_LABEL,
    )


def to_item_record(raw: Any) -> ItemRecord:
    """Build a plant record from one raw listing entry or detail object."""
    return ItemRecord(
        id=coerce_identifier(first_present(raw, ITEM_ID_KEYS)),
        name=coerce_text(first_present(raw, ITEM_NAME_KEYS), UNNAMED_ITEM),
        image_url=coerce_text(first_present(raw, ITEM_IMAGE_KEYS)),
        description=coerce_text(first_present(raw, ITEM_DESCRIPTION_KEYS)),
        category=coerce_text(first_present(raw, ITEM_CATEGORY_KEYS)),
        price=coerce_price(first_present(raw, ITEM_PRICE_KEYS)),
    )


def _looks_like_item(value: Any) -> bool:
    return isinstance(value, Mapping) and not ITEM_FIELD_KEYS.isdisjoint(value.keys())


def _unwrap_item(value: Any) -> Optional[Mapping]:
    """Return the item mapping held by ``value``, if any."""
    if isinstance(value, list):
        value = value[0] if value else None
    if _looks_like_item(value):
        return value
    return None


def extract_single(payload: Any) -> Optional[ItemRecord]:
    """
    Find the plant inside a single-plant response.

    The plant may be wrapped under a container key, be the payload itself, or
    be the first element of a list.

    Returns:
        The plant record, or None if the payload holds no plant
    """
    if isinstance(payload, Mapping):
        for key in SINGLE_CONTAINER_KEYS:
            item = _unwrap_item(payload.get(key))
            if item is not None:
                return to_item_record(item)

    item = _unwrap_item(payload)
    if item is not None:
        return to_item_record(item)

    logger.debug("No plant found in single-plant payload")
    return None


def iter_categories(payload: Any) -> Iterator[CategoryRecord]:
    """Lazily yield category records from a category listing payload."""
    for raw in extract_list(payload):
        yield to_category_record(raw)


def iter_items(payload: Any) -> Iterator[ItemRecord]:
    """Lazily yield plant records from a plant listing payload."""
    for raw in extract_list(payload):
        yield to_item_record(raw)
