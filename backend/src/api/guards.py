"""Route guard over the authentication state."""
from enum import StrEnum

from schemas.auth import Anonymous, AuthState, Authenticated

LOGIN_PATH = "/login"
DASHBOARD_PATH = "/dashboard"


class Access(StrEnum):
    """Who may see a route."""

    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


def guard(state: AuthState, access: Access) -> str | None:
    """
    Decide whether a route may render for the given auth state.

    Returns the path to redirect to, or None when the route may render.
    Signed-out visitors of authenticated routes go to the login page; signed-in
    visitors of anonymous-only routes (sign-up, login) go to the dashboard.
    """
    if access is Access.AUTHENTICATED and isinstance(state, Anonymous):
        return LOGIN_PATH
    if access is Access.ANONYMOUS and isinstance(state, Authenticated):
        return DASHBOARD_PATH
    return None
