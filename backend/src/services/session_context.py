"""
Session context: who is signed in for one browser session.

Wraps the SDK's auth client. State changes arrive through the SDK's
session-change notifications (sign-in, token refresh, sign-out), so sign-up and
sign-in never set the state directly.
"""
import logging
from collections.abc import Callable
from typing import Any

from supabase_auth.errors import AuthError

from schemas.auth import (
    ANONYMOUS,
    AuthResult,
    AuthState,
    Authenticated,
    User,
    state_from_session,
)

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"

Listener = Callable[[AuthState], None]


class SessionContext:
    """Single source of truth for the signed-in user of a browser session."""

    def __init__(self, client: Any) -> None:
        self._client = client
        self._state: AuthState = ANONYMOUS
        self._listeners: list[Listener] = []
        self._subscription: Any = None

    @property
    def client(self) -> Any:
        """The SDK client, also used for data operations under this session."""
        return self._client

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def user(self) -> User | None:
        if isinstance(self._state, Authenticated):
            return self._state.user
        return None

    @property
    def started(self) -> bool:
        return self._subscription is not None

    async def start(self) -> None:
        """Load any existing session and subscribe to session changes."""
        if self.started:
            return
        self._subscription = self._client.auth.on_auth_state_change(self._on_auth_change)
        await self.refresh()

    def close(self) -> None:
        """Unsubscribe from the backend and drop all listeners."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self._listeners.clear()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with the new state on every change.

        Returns a function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def refresh(self) -> None:
        """
        Re-read the backend session.

        The SDK refreshes an expired access token while reading; a refresh the
        backend rejects leaves the browser session signed out.
        """
        try:
            session = await self._client.auth.get_session()
        except AuthError:
            logger.info("Stored session could not be restored; signing out locally")
            self._set_state(ANONYMOUS)
            return
        self._set_state(state_from_session(session))

    async def sign_up(self, email: str, password: str, display_name: str) -> AuthResult:
        """Create an account. The session (if any) arrives via notification."""
        return await self._call(
            "sign up",
            self._client.auth.sign_up,
            {
                "email": email,
                "password": password,
                "options": {"data": {"full_name": display_name}},
            },
        )

    async def sign_in(self, email: str, password: str) -> AuthResult:
        """Sign in with email and password."""
        return await self._call(
            "sign in",
            self._client.auth.sign_in_with_password,
            {"email": email, "password": password},
        )

    async def sign_out(self) -> AuthResult:
        """Sign out. The state is anonymous afterwards even if the call fails."""
        result = await self._call("sign out", self._client.auth.sign_out)
        if not result.ok:
            self._set_state(ANONYMOUS)
        return result

    async def _call(self, action: str, method: Callable, *args: Any) -> AuthResult:
        try:
            await method(*args)
        except AuthError as e:
            logger.info("Auth %s failed: %s", action, e.message)
            return AuthResult(error=e.message)
        except Exception:
            logger.exception("Unexpected error during auth %s", action)
            return AuthResult(error=UNEXPECTED_ERROR_MESSAGE)
        return AuthResult()

    def _on_auth_change(self, event: Any, session: Any) -> None:
        logger.debug("Auth state change: %s", event)
        self._set_state(state_from_session(session))

    def _set_state(self, state: AuthState) -> None:
        if state == self._state:
            return
        self._state = state
        for listener in list(self._listeners):
            listener(state)
