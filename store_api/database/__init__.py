# Storage modules

from .carts import CartStore
from .plants import FALLBACK_PLANTS, get_fallback_plant

__all__ = [
    "CartStore",
    "FALLBACK_PLANTS",
    "get_fallback_plant",
]
