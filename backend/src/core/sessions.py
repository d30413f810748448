"""In-memory registry of browser sessions keyed by cookie id."""
import logging
import secrets
import time
from collections.abc import Awaitable, Callable
from typing import Any

from core.backend import Backend
from services.session_context import SessionContext
from views.dashboard import DashboardView
from views.signin import SignInView
from views.signup import SignUpView

logger = logging.getLogger(__name__)


class BrowserSession:
    """
    Server-side state for one browser.

    Owns the SDK client, the session context and the screens. Screens are
    created on first use and unmounted when the session is closed.
    """

    def __init__(self, session_id: str, context: SessionContext) -> None:
        self.id = session_id
        self.context = context
        self.last_seen = time.monotonic()
        self._dashboard: DashboardView | None = None
        self._signup: SignUpView | None = None
        self._signin: SignInView | None = None

    @property
    def dashboard(self) -> DashboardView:
        if self._dashboard is None:
            self._dashboard = DashboardView(self.context)
        return self._dashboard

    @property
    def signup(self) -> SignUpView:
        if self._signup is None:
            self._signup = SignUpView(self.context)
        return self._signup

    @property
    def signin(self) -> SignInView:
        if self._signin is None:
            self._signin = SignInView(self.context)
        return self._signin

    def touch(self) -> None:
        self.last_seen = time.monotonic()

    def idle_for(self) -> float:
        return time.monotonic() - self.last_seen

    def close(self) -> None:
        """Unmount screens and end the session-change subscription."""
        if self._dashboard is not None:
            self._dashboard.unmount()
        self.context.close()


ContextFactory = Callable[[], Awaitable[SessionContext]]


def backend_context_factory(backend: Backend) -> ContextFactory:
    """Open a session context backed by a fresh SDK client."""

    async def factory() -> SessionContext:
        client = await backend.connect()
        return SessionContext(client)

    return factory


class SessionRegistry:
    """Live browser sessions with idle expiry."""

    def __init__(self, context_factory: ContextFactory, idle_timeout: float) -> None:
        self._context_factory = context_factory
        self._idle_timeout = idle_timeout
        self._sessions: dict[str, BrowserSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, session_id: str | None) -> BrowserSession | None:
        """Return a live session, or None if unknown or expired."""
        if not session_id:
            return None
        session = self._sessions.get(session_id)
        if session is None:
            return None
        if session.idle_for() > self._idle_timeout:
            self.discard(session_id)
            return None
        return session

    async def resolve(self, session_id: str | None) -> tuple[BrowserSession, bool]:
        """
        Return the session for a cookie id, opening a new one if needed.

        Returns:
            The session and whether it was newly opened (the caller must then
            set the cookie).
        """
        self.purge_expired()
        session = self.get(session_id)
        if session is not None:
            session.touch()
            return session, False
        return await self.open(), True

    async def open(self) -> BrowserSession:
        context = await self._context_factory()
        await context.start()
        session = BrowserSession(secrets.token_urlsafe(32), context)
        self._sessions[session.id] = session
        logger.debug("Opened browser session (%d live)", len(self._sessions))
        return session

    def discard(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is not None:
            session.close()

    def purge_expired(self) -> int:
        """Close sessions idle longer than the timeout. Returns how many."""
        expired = [
            session_id for session_id, session in self._sessions.items()
            if session.idle_for() > self._idle_timeout
        ]
        for session_id in expired:
            self.discard(session_id)
        if expired:
            logger.info("Closed %d idle browser sessions", len(expired))
        return len(expired)

    def close_all(self) -> None:
        for session_id in list(self._sessions):
            self.discard(session_id)

    def __contains__(self, session_id: Any) -> bool:
        return session_id in self._sessions
