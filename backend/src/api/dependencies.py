"""FastAPI dependencies for injection."""
from fastapi import Request

from core.backend import Backend
from core.sessions import BrowserSession


def get_backend(request: Request) -> Backend:
    return request.app.state.backend


def get_browser_session(request: Request) -> BrowserSession:
    """
    Browser session resolved by BrowserSessionMiddleware.

    Raises:
        RuntimeError: If the route is not covered by the middleware.
    """
    session = getattr(request.state, "browser_session", None)
    if session is None:
        raise RuntimeError("No browser session bound to this request")
    return session


__all__ = [
    "get_backend",
    "get_browser_session",
]
