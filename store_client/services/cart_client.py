"""
Cart API Client

HTTP client for the storefront cart routes. The session-id header selects
which cart the server operates on.
"""

import logging
from typing import Optional, Any
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)


class CartClient:
    """Client for the storefront cart API"""

    def __init__(
        self,
        base_url: str,
        session_id: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize cart client.

        Args:
            base_url: Base URL of the storefront API
            session_id: Cart session; the server's shared default cart if omitted
            http_client: Preconfigured client (tests inject a transport)
        """
        self.base_url = base_url.rstrip("/")
        self.session_id = session_id
        self._http_client = http_client or httpx.AsyncClient(timeout=30.0)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    def _generate_headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.session_id:
            headers["session-id"] = self.session_id
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
    ) -> dict[str, Any]:
        """Make an HTTP request for this session"""
        url = f"{self.base_url}{path}"

        response = await self._http_client.request(
            method=method,
            url=url,
            headers=self._generate_headers(),
            json=body,
        )

        if response.status_code >= 400:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            response.raise_for_status()

        return response.json()

    async def get_cart(self) -> dict:
        """Get cart contents"""
        return await self._request("GET", "/api/cart")

    async def get_item(self, plant_id: str) -> dict:
        """Get a single cart item"""
        return await self._request("GET", f"/api/cart/{quote(plant_id, safe='')}")

    async def add_to_cart(self, plant_id: str, quantity: int = 1) -> dict:
        """Add a plant to the cart"""
        return await self._request(
            "POST",
            "/api/cart",
            body={"plantId": plant_id, "quantity": quantity},
        )

    async def update_cart_item(self, plant_id: str, quantity: int) -> dict:
        """Set item quantity; zero removes the item"""
        return await self._request(
            "PUT",
            "/api/cart",
            body={"plantId": plant_id, "quantity": quantity},
        )

    async def remove_from_cart(self, plant_id: str) -> dict:
        """Remove an item from the cart"""
        return await self._request("DELETE", f"/api/cart/{quote(plant_id, safe='')}")

    async def clear_cart(self) -> dict:
        """Empty the cart"""
        return await self._request("DELETE", "/api/cart")
