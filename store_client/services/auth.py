"""
Client Auth State

Holds the signed-in user for a storefront client and talks to the
storefront auth API. Every operation is a single request/response round
trip and reports its outcome as an AuthResult; nothing is raised to the
caller.

Usage:
    auth = get_auth_state()
    unsubscribe = auth.subscribe(render)
    await auth.mount()

    if await auth.login_with_password(email, password):
        ...
"""

import logging
from typing import Any, Callable, Optional

import httpx

from ..core.config import settings
from ..core.storage import FileTokenStorage, TokenStorage
from ..models import AuthResult, AuthSnapshot, AuthUser

logger = logging.getLogger(__name__)

Listener = Callable[[AuthSnapshot], None]

# Failures that end an operation without reaching the caller
REQUEST_ERRORS = (httpx.HTTPError, ValueError, KeyError, TypeError, OSError)

NETWORK_ERROR_MESSAGE = "Network error. Please check your connection."


class AuthState:
    """
    Reactive authentication state.

    Starts loading with no user. check_auth (run once by mount) settles it
    into authenticated or anonymous. Operations may run concurrently; the
    last state write wins.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        storage: TokenStorage,
        token_key: str = "authToken",
        demo_otp_enabled: bool = True,
    ):
        """
        Initialize auth state.

        Args:
            http_client: Client with base_url pointing at the storefront API
            storage: Where the bearer token is persisted
            token_key: Storage key of the bearer token
            demo_otp_enabled: Pass OTPs returned inline by the server on to the caller
        """
        self._http_client = http_client
        self._storage = storage
        self.token_key = token_key
        self.demo_otp_enabled = demo_otp_enabled

        self._user: Optional[AuthUser] = None
        self._is_loading = True
        self._mounted = False
        self._listeners: list[Listener] = []

    # ==================== State ====================

    @property
    def user(self) -> Optional[AuthUser]:
        return self._user

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def snapshot(self) -> AuthSnapshot:
        """Current state as an immutable value"""
        return AuthSnapshot(user=self._user, is_loading=self._is_loading)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call listener with a snapshot after every state change.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, user: Optional[AuthUser], is_loading: bool) -> None:
        self._user = user
        self._is_loading = is_loading

        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Auth state listener failed")

    # ==================== Session bootstrap ====================

    async def mount(self) -> None:
        """Run the initial auth check once per instance"""
        if self._mounted:
            return
        self._mounted = True
        await self.check_auth()

    async def check_auth(self) -> None:
        """
        Restore the user from the persisted token.

        A login or logout that finishes while the check is in flight wins:
        the check only settles state for the token it sent.
        """
        restored: Optional[AuthUser] = None
        token = None

        try:
            token = self._storage.get(self.token_key)
            if not token:
                return

            response = await self._http_client.get(
                "/api/auth/me",
                headers={"Authorization": f"Bearer {token}"},
            )

            if response.is_success:
                user = AuthUser.from_dict(response.json()["user"])
                if self._storage.get(self.token_key) == token:
                    restored = user
            else:
                logger.info(f"Stored token rejected with {response.status_code}, discarding")
                self._discard_token(token)
        except REQUEST_ERRORS as e:
            logger.error(f"Auth check failed: {e}")
            if token:
                self._discard_token(token)
        finally:
            self._set_state(restored or self._user, False)

    # ==================== OTP ====================

    async def send_login_otp(self, email: str) -> AuthResult:
        """Ask the server to email a login OTP"""
        try:
            response = await self._http_client.post(
                "/api/auth/send-otp-email",
                json={"email": email},
            )
        except httpx.HTTPError as e:
            logger.error(f"Send OTP failed: {e}")
            return AuthResult(success=False, error=NETWORK_ERROR_MESSAGE)

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Failed to parse send OTP response: {e}")
            return AuthResult(
                success=False,
                error=f"Server error: {response.status_code} {response.reason_phrase}",
            )

        if not response.is_success:
            return AuthResult(success=False, error=self._error_message(response, data))

        return self._otp_sent(data)

    async def login(self, email: str, otp: str, is_registration: bool = False) -> AuthResult:
        """Verify an OTP and start a session"""
        try:
            response = await self._http_client.post(
                "/api/auth/verify-otp",
                json={"email": email, "otp": otp, "isRegistration": is_registration},
            )

            if not response.is_success:
                message = self._error_message(response)
                logger.error(f"Login failed: {message}")
                return AuthResult(success=False, error=message)

            return self._start_session(response.json())
        except REQUEST_ERRORS as e:
            logger.error(f"Login failed: {e}")
            return AuthResult(success=False, error=NETWORK_ERROR_MESSAGE)

    # ==================== Password ====================

    async def login_with_password(self, email: str, password: str) -> AuthResult:
        """Sign in with email and password"""
        try:
            response = await self._http_client.post(
                "/api/auth/login",
                json={"email": email, "password": password},
            )

            if not response.is_success:
                return AuthResult(success=False, error=self._error_message(response))

            return self._start_session(response.json())
        except REQUEST_ERRORS as e:
            logger.error(f"Password login failed: {e}")
            return AuthResult(success=False, error=NETWORK_ERROR_MESSAGE)

    async def register(self, name: str, email: str, phone: str, password: str) -> AuthResult:
        """
        Create an account. The server follows up with a verification OTP.

        The response body may be empty or not JSON at all.
        """
        try:
            response = await self._http_client.post(
                "/api/auth/register",
                json={"name": name, "email": email, "phone": phone, "password": password},
            )
        except httpx.HTTPError as e:
            logger.error(f"Registration failed: {e}")
            return AuthResult(success=False, error=NETWORK_ERROR_MESSAGE)

        data: dict[str, Any] = {}
        if "application/json" in response.headers.get("content-type", ""):
            try:
                parsed = response.json()
                if isinstance(parsed, dict):
                    data = parsed
            except ValueError as e:
                logger.error(f"Failed to parse registration response: {e}")
                if not response.is_success:
                    return AuthResult(
                        success=False,
                        error=f"Server error: {response.status_code} {response.reason_phrase}",
                    )

        if response.is_success:
            return self._otp_sent(data)

        return AuthResult(
            success=False,
            error=data.get("message")
            or f"Registration failed: {response.status_code} {response.reason_phrase}",
        )

    def logout(self) -> None:
        """Forget the token and the user. No network call."""
        self._discard_token()
        self._set_state(None, self._is_loading)

    async def aclose(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    # ==================== Helpers ====================

    def _start_session(self, data: Any) -> AuthResult:
        """Persist the token and user from a successful login response"""
        token = data.get("token") if isinstance(data, dict) else None
        if not token:
            return AuthResult(success=False, error="No token in response")

        user = AuthUser.from_dict(data["user"])
        self._storage.set(self.token_key, token)
        self._set_state(user, self._is_loading)
        logger.info(f"Signed in as {user.email}")
        return AuthResult(success=True)

    def _otp_sent(self, data: Any) -> AuthResult:
        demo_otp = data.get("demoOTP") if isinstance(data, dict) else None
        if demo_otp and self.demo_otp_enabled:
            logger.warning(f"DEMO MODE: email service not configured, OTP is {demo_otp}")
            return AuthResult(success=True, demo_otp=str(demo_otp))
        return AuthResult(success=True)

    def _discard_token(self, token: Optional[str] = None) -> None:
        """Remove the stored token, only if it is still `token` when one is given"""
        try:
            if token is not None and self._storage.get(self.token_key) != token:
                return
            self._storage.remove(self.token_key)
        except OSError as e:
            logger.error(f"Could not remove stored token: {e}")

    @staticmethod
    def _error_message(response: httpx.Response, data: Any = None) -> str:
        if data is None:
            try:
                data = response.json()
            except ValueError:
                data = None

        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
        return f"{response.status_code} {response.reason_phrase}"


_auth_state: Optional[AuthState] = None


def get_auth_state() -> AuthState:
    """Get or create the client's auth state"""
    global _auth_state
    if _auth_state is None:
        _auth_state = AuthState(
            http_client=httpx.AsyncClient(base_url=settings.api_base_url),
            storage=FileTokenStorage(settings.token_storage_path),
            token_key=settings.auth_token_key,
            demo_otp_enabled=settings.demo_otp_enabled,
        )
    return _auth_state
