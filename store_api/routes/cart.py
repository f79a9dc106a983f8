"""Cart API routes for the storefront"""

from fastapi import APIRouter, Depends, Header, Request
from typing import Optional

from ..config import settings
from ..database.carts import CartStore
from ..models.cart import (
    CartItem,
    CartResponse,
    AddToCartRequest,
    UpdateCartItemRequest,
    ErrorResponse,
)

router = APIRouter(prefix="/api/cart", tags=["Cart"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


def get_session_key(session_id: Optional[str] = Header(None)) -> str:
    """Extract session key from the session-id header"""
    return session_id or settings.default_session_key


def get_cart_store(request: Request) -> CartStore:
    """Cart store owned by the running application"""
    return request.app.state.cart_store


@router.get("", response_model=CartResponse)
async def get_cart(
    session_key: str = Depends(get_session_key),
    store: CartStore = Depends(get_cart_store),
):
    """Get cart contents"""
    return store.get(session_key)


@router.get("/{plant_id}", response_model=CartItem, responses=ERROR_RESPONSES)
async def get_cart_item(
    plant_id: str,
    session_key: str = Depends(get_session_key),
    store: CartStore = Depends(get_cart_store),
):
    """Get a specific cart item by plant ID"""
    return store.get_item(session_key, plant_id)


@router.post("", response_model=CartResponse, responses=ERROR_RESPONSES)
async def add_to_cart(
    request: AddToCartRequest,
    session_key: str = Depends(get_session_key),
    store: CartStore = Depends(get_cart_store),
):
    """Add a plant to the cart"""
    return await store.add(session_key, request.plant_id, request.quantity)


@router.put("", response_model=CartResponse, responses=ERROR_RESPONSES)
async def update_cart_item(
    request: UpdateCartItemRequest,
    session_key: str = Depends(get_session_key),
    store: CartStore = Depends(get_cart_store),
):
    """Update item quantity in cart"""
    return await store.update(session_key, request.plant_id, request.quantity)


@router.delete("/{plant_id}", response_model=CartResponse)
async def remove_from_cart(
    plant_id: str,
    session_key: str = Depends(get_session_key),
    store: CartStore = Depends(get_cart_store),
):
    """Remove an item from the cart"""
    return await store.remove(session_key, plant_id)


@router.delete("", response_model=CartResponse)
async def clear_cart(
    session_key: str = Depends(get_session_key),
    store: CartStore = Depends(get_cart_store),
):
    """Clear all items from cart"""
    return await store.clear(session_key)
