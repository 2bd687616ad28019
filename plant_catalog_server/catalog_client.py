"""Plant catalog API client."""

import logging
import urllib.parse
from typing import Any, Optional

import httpx

from .config import DEFAULT_BASE_URL

logger = logging.getLogger(__name__)


def _quote(value: Any) -> str:
    return urllib.parse.quote(str(value), safe="")


class CatalogFetchError(Exception):
    """Raised when the catalog API cannot be reached or returns bad data."""


class PlantCatalogClient:
    """
    Client for the plant catalog API.

    Returns the parsed JSON of each endpoint untouched; callers run it through
    the normalizer. Transport and decoding failures are raised as
    CatalogFetchError so a malformed payload is never handed on.
    """

    CATEGORIES_PATH = "/categories"
    ALL_PLANTS_PATH = "/plants"
    CATEGORY_PLANTS_PATH = "/category/{category_id}"
    PLANT_PATH = "/plant/{plant_id}"

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the catalog client.

        Args:
            base_url: API base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url
        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def _get_json(self, path: str) -> Any:
        """Fetch a path and decode the JSON body."""
        logger.info(f"GET {self.base_url}{path}")
        try:
            response = await self.client.get(path)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Request to {path} failed: {e}")
            raise CatalogFetchError(f"Failed to fetch {path}: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from {path}: {e}")
            raise CatalogFetchError(f"Invalid JSON from {path}") from e

    async def fetch_categories(self) -> Any:
        """Fetch the category listing."""
        return await self._get_json(self.CATEGORIES_PATH)

    async def fetch_all_plants(self) -> Any:
        """Fetch every plant in the catalog."""
        return await self._get_json(self.ALL_PLANTS_PATH)

    async def fetch_plants_by_category(self, category_id: str) -> Any:
        """Fetch the plants of one category."""
        return await self._get_json(self.CATEGORY_PLANTS_PATH.format(category_id=_quote(category_id)))

    async def fetch_plant(self, plant_id: str) -> Any:
        """Fetch a single plant."""
        return await self._get_json(self.PLANT_PATH.format(plant_id=_quote(plant_id)))

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()
