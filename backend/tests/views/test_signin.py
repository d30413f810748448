"""Tests for the sign-in view."""
import pytest

from fakes import TEST_EMAIL, TEST_PASSWORD, FakeBackend, FakeSupabaseClient
from services.session_context import SessionContext
from views.auth_form import AuthFormView
from views.signin import SignInView


async def test__submit__success_redirects_to_dashboard(
    context: SessionContext, fake_backend: FakeBackend,
) -> None:
    """Valid credentials lead to the dashboard."""
    fake_backend.add_account(TEST_EMAIL, TEST_PASSWORD)
    view = SignInView(context)
    assert await view.submit(TEST_EMAIL, TEST_PASSWORD) is True
    assert view.redirect_to == "/dashboard"


async def test__submit__bad_credentials_show_message(
    context: SessionContext, fake_backend: FakeBackend,
) -> None:
    """The backend's message is shown and the email kept."""
    fake_backend.add_account(TEST_EMAIL, TEST_PASSWORD)
    view = SignInView(context)

    assert await view.submit(TEST_EMAIL, "wrong") is False
    assert view.redirect_to is None
    assert view.email == TEST_EMAIL
    notice = view.take_notice()
    assert notice is not None
    assert notice.message == "Invalid login credentials"


async def test__submit__missing_password_blocked(
    context: SessionContext, fake_client: FakeSupabaseClient,
) -> None:
    """A blank password never reaches the backend."""
    view = SignInView(context)
    assert await view.submit(TEST_EMAIL, "") is False
    assert "sign_in_with_password" not in fake_client.auth.calls


async def test__auth_form__send_must_be_implemented(context: SessionContext) -> None:
    """The shared form machine cannot be used without a `_send`."""
    with pytest.raises(TypeError):
        AuthFormView(context)
