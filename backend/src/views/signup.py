"""Sign-up screen."""
from schemas.auth import AuthResult
from services.session_context import SessionContext
from views.auth_form import AuthFormView
from views.notices import Notice

CONFIRM_EMAIL_MESSAGE = "Check your email to confirm your account, then sign in."


class SignUpView(AuthFormView):
    """Create-account form: full name, email and password are required."""

    required_fields = (
        ("display_name", "Full name"),
        ("email", "Email address"),
        ("password", "Password"),
    )

    def __init__(self, context: SessionContext) -> None:
        super().__init__(context)
        self.email = ""
        self.display_name = ""

    async def submit(self, email: str, password: str, display_name: str) -> bool:
        """
        Submit the form.

        Entered email and name are kept for re-rendering; the password never is.
        When the backend creates the account without a session (email
        confirmation enabled) an info notice is shown instead of redirecting.
        """
        self.email = email
        self.display_name = display_name
        accepted = await self._submit(
            {"email": email, "password": password, "display_name": display_name},
        )
        if accepted and self._context.user is None:
            self.notice = Notice.info(CONFIRM_EMAIL_MESSAGE)
        return accepted

    async def _send(self, values: dict[str, str]) -> AuthResult:
        return await self._context.sign_up(
            values["email"], values["password"], values["display_name"],
        )
