"""Client Auth Data Models"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class AuthUser:
    """Signed-in user as reported by the auth API"""
    id: str
    email: str
    name: Optional[str] = None
    is_admin: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AuthUser":
        """Build from an API payload (camelCase keys)"""
        return cls(
            id=str(data["id"]),
            email=data["email"],
            name=data.get("name"),
            is_admin=bool(data.get("isAdmin", False)),
        )


@dataclass
class AuthResult:
    """Outcome of an auth operation. Truthy when it succeeded."""
    success: bool
    demo_otp: Optional[str] = None  # Only set in demo mode
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.success


@dataclass(frozen=True)
class AuthSnapshot:
    """Auth state pushed to subscribers"""
    user: Optional[AuthUser]
    is_loading: bool

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None
