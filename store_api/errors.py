"""Cart domain errors"""

from typing import Optional


class CartError(Exception):
    """Base exception for cart operations"""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class CartValidationError(CartError):
    """Missing or invalid request input"""

    status_code = 400


class NotFoundError(CartError):
    """Unknown plant or cart entry"""

    status_code = 404


class InsufficientStockError(CartError):
    """Plant is out of stock or has fewer units than requested"""

    status_code = 400
