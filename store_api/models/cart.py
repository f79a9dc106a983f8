"""Cart models for the storefront"""

from pydantic import BaseModel, Field, StrictInt
from typing import Optional, Union

from .plant import CamelModel, Plant


class CartItem(CamelModel):
    """Line item in a session cart"""
    plant_id: str
    quantity: int = Field(gt=0)
    plant: Plant


class CartResponse(CamelModel):
    """Cart contents with derived totals"""
    items: list[CartItem] = []
    total: Union[int, float] = 0
    item_count: int = 0


class AddToCartRequest(CamelModel):
    """Request to add a plant to the cart"""
    # Presence is checked by the store so a missing id maps to a 400
    plant_id: Optional[str] = None
    quantity: StrictInt = 1


class UpdateCartItemRequest(CamelModel):
    """Request to set the quantity of a cart item"""
    plant_id: Optional[str] = None
    quantity: StrictInt


class ErrorResponse(BaseModel):
    """Error body returned by every failing API call"""
    message: str
    status: int
