"""
Plant Catalog Client

Resolves plant IDs against the external catalog service so they can be
placed in a cart. Falls back to the embedded catalog when the service
cannot be reached.
"""

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from ..database.plants import get_fallback_plant
from ..models.plant import Plant

logger = logging.getLogger(__name__)


class PlantClient:
    """
    Client for the plant catalog API.

    Makes a single attempt per lookup: no caching and no retries.
    """

    def __init__(
        self,
        plant_api_url: str,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize plant client.

        Args:
            plant_api_url: Base URL of the catalog API
            http_client: Preconfigured client (tests inject a mock transport)
        """
        self.base_url = plant_api_url.rstrip("/")
        self._http_client = http_client or httpx.AsyncClient()

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    async def get_plant(self, plant_id: str) -> Optional[Plant]:
        """
        Get plant details.

        Returns None when the catalog answers with a non-2xx status. Network
        and payload errors fall back to the embedded catalog.
        """
        url = f"{self.base_url}/plants/{quote(plant_id, safe='')}"

        try:
            response = await self._http_client.get(url)
            if response.is_success:
                return Plant.model_validate(response.json()["plant"])
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.error(f"Error fetching plant for cart: {e}")
            plant = get_fallback_plant(plant_id)
            if plant:
                logger.info(f"Using fallback catalog entry for {plant_id}")
            return plant

        logger.warning(f"Catalog returned {response.status_code} for plant {plant_id}")
        return None
