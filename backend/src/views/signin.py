"""Sign-in screen."""
from schemas.auth import AuthResult
from services.session_context import SessionContext
from views.auth_form import AuthFormView


class SignInView(AuthFormView):
    """Email and password sign-in form."""

    required_fields = (
        ("email", "Email address"),
        ("password", "Password"),
    )

    def __init__(self, context: SessionContext) -> None:
        super().__init__(context)
        self.email = ""

    async def submit(self, email: str, password: str) -> bool:
        """Submit the form; the entered email is kept for re-rendering."""
        self.email = email
        return await self._submit({"email": email, "password": password})

    async def _send(self, values: dict[str, str]) -> AuthResult:
        return await self._context.sign_in(values["email"], values["password"])
