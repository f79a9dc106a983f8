"""Session cart storage for the storefront"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from ..errors import CartValidationError, InsufficientStockError, NotFoundError
from ..models.cart import CartItem, CartResponse
from ..services.plant_client import PlantClient

logger = logging.getLogger(__name__)


class CartStore:
    """
    In-memory carts keyed by session.

    Contents live for the lifetime of the process only. Mutations for a
    session run under that session's lock, so a request suspended on the
    catalog lookup cannot interleave with another request for the same cart.
    """

    def __init__(self, plant_client: PlantClient):
        self.plant_client = plant_client
        self.carts: dict[str, list[CartItem]] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}

    @property
    def session_count(self) -> int:
        """Number of sessions holding a cart"""
        return len(self.carts)

    def get(self, session_key: str) -> CartResponse:
        """Get cart contents, empty if the session has no cart"""
        return self._build_response(self.carts.get(session_key, []))

    def get_item(self, session_key: str, plant_id: str) -> CartItem:
        """Get a single line item"""
        item = self._find_item(session_key, plant_id)
        if not item:
            raise NotFoundError("Cart item not found")
        return item.model_copy(deep=True)

    async def add(
        self,
        session_key: str,
        plant_id: Optional[str],
        quantity: int = 1,
    ) -> CartResponse:
        """Add a plant to the cart, merging with an existing line item"""
        if not plant_id:
            raise CartValidationError("Plant ID is required")
        if quantity < 1:
            raise CartValidationError("Quantity must be at least 1")

        async with self._session(session_key):
            plant = await self.plant_client.get_plant(plant_id)
            if not plant:
                raise NotFoundError("Plant not found")

            if not plant.in_stock or plant.stock_quantity < quantity:
                raise InsufficientStockError("Insufficient stock")

            items = self.carts.setdefault(session_key, [])
            existing_item = next(
                (item for item in items if item.plant_id == plant_id),
                None,
            )

            if existing_item:
                existing_item.quantity += quantity
            else:
                items.append(CartItem(plant_id=plant_id, quantity=quantity, plant=plant))

            logger.debug(f"Added {quantity}x {plant_id} to cart {session_key}")
            return self._build_response(items)

    async def update(
        self,
        session_key: str,
        plant_id: Optional[str],
        quantity: int,
    ) -> CartResponse:
        """Set item quantity; zero removes the item. Stock is not rechecked."""
        if not plant_id or quantity < 0:
            raise CartValidationError("Invalid plant ID or quantity")

        async with self._session(session_key):
            items = self.carts.get(session_key, [])
            item = next((i for i in items if i.plant_id == plant_id), None)
            if not item:
                raise NotFoundError("Item not found in cart")

            if quantity == 0:
                items.remove(item)
                if not items:
                    del self.carts[session_key]
            else:
                item.quantity = quantity

            return self._build_response(items)

    async def remove(self, session_key: str, plant_id: str) -> CartResponse:
        """Remove an item from the cart. Unknown items are ignored."""
        async with self._session(session_key):
            items = [i for i in self.carts.get(session_key, []) if i.plant_id != plant_id]
            if items:
                self.carts[session_key] = items
            else:
                self.carts.pop(session_key, None)
            return self._build_response(items)

    async def clear(self, session_key: str) -> CartResponse:
        """Drop the session's cart"""
        async with self._session(session_key):
            self.carts.pop(session_key, None)
            logger.debug(f"Cleared cart {session_key}")
            return CartResponse()

    @asynccontextmanager
    async def _session(self, session_key: str) -> AsyncIterator[None]:
        """Hold the session lock. Idle sessions without a cart give their lock back."""
        lock = self._locks.get(session_key)
        if lock is None:
            lock = self._locks[session_key] = asyncio.Lock()
        self._lock_users[session_key] = self._lock_users.get(session_key, 0) + 1

        try:
            async with lock:
                yield
        finally:
            self._lock_users[session_key] -= 1
            if not self._lock_users[session_key]:
                del self._lock_users[session_key]
                if session_key not in self.carts:
                    del self._locks[session_key]

    def _find_item(self, session_key: str, plant_id: str) -> Optional[CartItem]:
        return next(
            (item for item in self.carts.get(session_key, []) if item.plant_id == plant_id),
            None,
        )

    def _build_response(self, items: list[CartItem]) -> CartResponse:
        """Snapshot items and recalculate totals"""
        return CartResponse(
            items=[item.model_copy(deep=True) for item in items],
            total=sum(item.plant.price * item.quantity for item in items),
            item_count=sum(item.quantity for item in items),
        )
