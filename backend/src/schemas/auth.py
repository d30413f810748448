"""Session and user representations shared by the auth context and views."""
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class User:
    """
    Read-only projection of the auth service's user.

    The auth service owns the record; the application only reads the fields it
    renders. `display_name` comes from the `full_name` entry of the user metadata
    written at sign-up.
    """

    id: str
    email: str | None
    display_name: str | None = None

    @classmethod
    def from_backend(cls, user: Any) -> "User":
        """Build from a supabase_auth `User` object."""
        metadata = getattr(user, "user_metadata", None) or {}
        display_name = metadata.get("full_name") or None
        return cls(id=str(user.id), email=user.email, display_name=display_name)

    @property
    def greeting_name(self) -> str:
        """Name shown in the dashboard header."""
        return self.display_name or self.email or ""


@dataclass(frozen=True)
class Authenticated:
    """A signed-in user."""

    user: User


@dataclass(frozen=True)
class Anonymous:
    """No signed-in user."""


AuthState = Authenticated | Anonymous

ANONYMOUS = Anonymous()


def state_from_session(session: Any) -> AuthState:
    """Map a supabase_auth `Session` (or None) to an AuthState."""
    if session is None or getattr(session, "user", None) is None:
        return ANONYMOUS
    return Authenticated(User.from_backend(session.user))


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a sign-up, sign-in or sign-out call."""

    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
