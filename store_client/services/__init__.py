# Client services

from .auth import AuthState, get_auth_state
from .cart_client import CartClient

__all__ = ["AuthState", "get_auth_state", "CartClient"]
