"""Tests for the sign-up, sign-in and sign-out pages."""
from httpx import AsyncClient

from fakes import TEST_EMAIL, TEST_NAME, TEST_PASSWORD, FakeBackend


async def test__signup_page__renders_form(client: AsyncClient) -> None:
    """GET /signup shows the form and sets the session cookie."""
    response = await client.get("/signup")
    assert response.status_code == 200
    assert "Create account" in response.text
    assert "notekeeper_session" in response.headers["set-cookie"]
    assert "httponly" in response.headers["set-cookie"].lower()


async def test__signup__success_redirects_to_dashboard(
    client: AsyncClient, fake_backend: FakeBackend,
) -> None:
    """A new account signs in and goes to the dashboard."""
    response = await client.post(
        "/signup",
        data={"full_name": TEST_NAME, "email": TEST_EMAIL, "password": TEST_PASSWORD},
    )
    assert response.status_code == 303
    assert response.headers["location"] == "/dashboard"
    assert TEST_EMAIL in fake_backend.accounts

    dashboard = await client.get("/dashboard")
    assert dashboard.status_code == 200
    assert f"Hello, {TEST_NAME}" in dashboard.text


async def test__signup__email_in_use_shows_message(
    client: AsyncClient, fake_backend: FakeBackend,
) -> None:
    """The backend message is shown inline and nothing redirects."""
    fake_backend.add_account(TEST_EMAIL, "other")
    response = await client.post(
        "/signup",
        data={"full_name": TEST_NAME, "email": TEST_EMAIL, "password": TEST_PASSWORD},
    )
    assert response.status_code == 400
    assert "User already registered" in response.text
    assert f'value="{TEST_EMAIL}"' in response.text
    assert TEST_PASSWORD not in response.text


async def test__signup__notice_shown_once(
    client: AsyncClient, fake_backend: FakeBackend,
) -> None:
    """Reloading the page dismisses the notice."""
    fake_backend.add_account(TEST_EMAIL, "other")
    await client.post(
        "/signup",
        data={"full_name": TEST_NAME, "email": TEST_EMAIL, "password": TEST_PASSWORD},
    )
    response = await client.get("/signup")
    assert "User already registered" not in response.text


async def test__signup__missing_fields_rejected(client: AsyncClient) -> None:
    """Blank required fields are reported without calling the backend."""
    response = await client.post("/signup", data={"email": TEST_EMAIL})
    assert response.status_code == 400
    assert "Please fill in: Full name, Password" in response.text


async def test__signup_page__signed_in_redirects(signed_in_client: AsyncClient) -> None:
    """Signed-in users cannot reach the sign-up page."""
    response = await signed_in_client.get("/signup")
    assert response.status_code == 303
    assert response.headers["location"] == "/dashboard"


async def test__login__bad_credentials(
    client: AsyncClient, fake_backend: FakeBackend,
) -> None:
    """Wrong password re-renders the form with the backend message."""
    fake_backend.add_account(TEST_EMAIL, TEST_PASSWORD)
    response = await client.post(
        "/login", data={"email": TEST_EMAIL, "password": "wrong"},
    )
    assert response.status_code == 400
    assert "Invalid login credentials" in response.text


async def test__login_page__signed_in_redirects(signed_in_client: AsyncClient) -> None:
    """Signed-in users are sent from login to the dashboard."""
    response = await signed_in_client.get("/login")
    assert response.status_code == 303
    assert response.headers["location"] == "/dashboard"


async def test__logout__redirects_to_login(signed_in_client: AsyncClient) -> None:
    """Signing out ends the session and the dashboard redirects to login."""
    response = await signed_in_client.post("/logout")
    assert response.status_code == 303
    assert response.headers["location"] == "/login"

    dashboard = await signed_in_client.get("/dashboard")
    assert dashboard.status_code == 303
    assert dashboard.headers["location"] == "/login"


async def test__sessions__are_per_browser(signed_in_client: AsyncClient) -> None:
    """A browser without the session cookie is not signed in."""
    signed_in_client.cookies.clear()
    response = await signed_in_client.get("/dashboard")
    assert response.status_code == 303
    assert response.headers["location"] == "/login"
