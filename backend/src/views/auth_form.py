"""Shared state machine for the sign-up and sign-in forms."""
from abc import ABC, abstractmethod
from enum import StrEnum

from schemas.auth import AuthResult
from services.session_context import SessionContext
from views.notices import Notice, NoticeHolder

DASHBOARD_PATH = "/dashboard"


class FormStatus(StrEnum):
    """Form submission state."""

    IDLE = "idle"
    SUBMITTING = "submitting"


class AuthFormView(NoticeHolder, ABC):
    """
    idle -> submitting -> idle (with a notice) or redirect to the dashboard.

    The redirect is not decided here: it follows from the session context
    reporting a signed-in user after a successful call.
    """

    # (field, label) pairs that must be non-blank before any network call
    required_fields: tuple[tuple[str, str], ...] = ()

    def __init__(self, context: SessionContext) -> None:
        self._context = context
        self.status = FormStatus.IDLE
        self.notice = None

    @property
    def submitting(self) -> bool:
        return self.status is FormStatus.SUBMITTING

    @property
    def redirect_to(self) -> str | None:
        """Where to send the browser instead of rendering the form."""
        if self._context.user is not None:
            return DASHBOARD_PATH
        return None

    def missing_fields(self, values: dict[str, str]) -> list[str]:
        """Labels of required fields that are empty."""
        return [
            label for field, label in self.required_fields
            if not (values.get(field) or "").strip()
        ]

    async def _submit(self, values: dict[str, str]) -> bool:
        """
        Validate and run `_send`.

        Returns True when the backend accepted the request.
        """
        if self.submitting:
            return False
        self.notice = None

        missing = self.missing_fields(values)
        if missing:
            self.notice = Notice.error(f"Please fill in: {', '.join(missing)}")
            return False

        self.status = FormStatus.SUBMITTING
        try:
            result = await self._send(values)
        finally:
            self.status = FormStatus.IDLE

        if not result.ok:
            self.notice = Notice.error(result.error or "")
            return False
        return True

    @abstractmethod
    async def _send(self, values: dict[str, str]) -> AuthResult:
        """Call the session context with the validated form values."""
