# Core modules

from .config import settings
from .storage import TokenStorage, MemoryTokenStorage, FileTokenStorage

__all__ = ["settings", "TokenStorage", "MemoryTokenStorage", "FileTokenStorage"]
