# Storefront Models

from .plant import CamelModel, Plant
from .cart import (
    CartItem,
    CartResponse,
    AddToCartRequest,
    UpdateCartItemRequest,
    ErrorResponse,
)

__all__ = [
    "CamelModel",
    "Plant",
    "CartItem",
    "CartResponse",
    "AddToCartRequest",
    "UpdateCartItemRequest",
    "ErrorResponse",
]
