"""Catalog browsing driver."""

import logging
from collections.abc import Awaitable, Iterable
from typing import Any, Optional, TypeVar

from .catalog_client import CatalogFetchError, PlantCatalogClient
from .models import CategoryRecord, DetailResult, ItemRecord
from .normalizer import extract_single, iter_categories, iter_items

logger = logging.getLogger(__name__)

T = TypeVar("T")

LISTING = "listing"
DETAIL = "detail"


class CatalogBrowser:
    """
    Fetches catalog data and normalizes it for display.

    Fetches can overlap when the user switches categories quickly. Each
    listing or detail fetch takes a ticket, and a response that arrives after
    a newer fetch of the same kind was started is dropped: the load method
    returns None instead of records so an older, slower response never
    replaces a newer one.
    """

    def __init__(self, client: PlantCatalogClient) -> None:
        self.client = client
        self.active_category: Optional[str] = None
        self._tickets: dict[str, int] = {LISTING: 0, DETAIL: 0}

    def _take_ticket(self, kind: str) -> int:
        self._tickets[kind] += 1
        return self._tickets[kind]

    def _is_current(self, kind: str, ticket: int) -> bool:
        return self._tickets[kind] == ticket

    async def _fetch_latest(self, kind: str, fetch: Awaitable[T]) -> tuple[bool, Optional[T]]:
        """
        Await a fetch and report whether it is still the latest of its kind.

        Failures of superseded fetches are dropped along with their results.
        """
        ticket = self._take_ticket(kind)
        try:
            payload = await fetch
        except CatalogFetchError:
            if not self._is_current(kind, ticket):
                logger.info(f"Ignoring failure of superseded {kind} fetch #{ticket}")
                return False, None
            raise

        if not self._is_current(kind, ticket):
            logger.info(f"Discarding stale {kind} response #{ticket}")
            return False, None
        return True, payload

    async def load_categories(self) -> list[CategoryRecord]:
        """Fetch and normalize the category listing."""
        payload = await self.client.fetch_categories()
        categories = list(iter_categories(payload))
        logger.info(f"Loaded {len(categories)} categories")
        return categories

    async def load_all_plants(self) -> Optional[list[ItemRecord]]:
        """
        Fetch every plant and make "All" the active selection.

        Returns:
            Plant records, or None if a newer listing fetch superseded this one
        """
        self.active_category = None
        current, payload = await self._fetch_latest(LISTING, self.client.fetch_all_plants())
        if not current:
            return None
        return self._to_items(payload)

    async def load_plants_by_category(self, category_id: Any) -> Optional[list[ItemRecord]]:
        """
        Fetch the plants of one category and make it the active selection.

        Returns:
            Plant records (possibly empty), or None if superseded
        """
        self.active_category = str(category_id)
        current, payload = await self._fetch_latest(
            LISTING, self.client.fetch_plants_by_category(category_id)
        )
        if not current:
            return None
        return self._to_items(payload)

    async def load_plant_details(self, plant_id: Any) -> Optional[DetailResult]:
        """
        Fetch a single plant.

        Returns:
            DetailResult (with no record when the plant was not found), or
            None if a newer detail fetch superseded this one
        """
        current, payload = await self._fetch_latest(DETAIL, self.client.fetch_plant(plant_id))
        if not current:
            return None
        return DetailResult(record=extract_single(payload))

    @staticmethod
    def first_selectable(categories: Iterable[CategoryRecord]) -> Optional[CategoryRecord]:
        """Return the first category that can be selected, if any."""
        return next((category for category in categories if category.selectable), None)

    @staticmethod
    def _to_items(payload: Any) -> list[ItemRecord]:
        items = list(iter_items(payload))
        logger.info(f"Loaded {len(items)} plants")
        return items
