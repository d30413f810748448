"""Pytest fixtures for testing."""
from collections.abc import AsyncGenerator

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from core.backend import Backend
from core.config import Settings
from fakes import TEST_EMAIL, TEST_NAME, TEST_PASSWORD, FakeBackend, FakeSupabaseClient
from services.session_context import SessionContext


@pytest.fixture
def settings() -> Settings:
    """Settings that do not read the environment or a .env file."""
    return Settings(
        _env_file=None,
        supabase_url="https://test.supabase.co",
        supabase_anon_key="test-anon-key",
    )


@pytest.fixture
def fake_backend() -> FakeBackend:
    """The hosted service: accounts and tables shared by all clients."""
    return FakeBackend()


@pytest.fixture
def fake_client(fake_backend: FakeBackend) -> FakeSupabaseClient:
    return FakeSupabaseClient(fake_backend)


@pytest.fixture
async def context(fake_client: FakeSupabaseClient) -> AsyncGenerator[SessionContext]:
    """A started session context with nobody signed in."""
    ctx = SessionContext(fake_client)
    await ctx.start()
    yield ctx
    ctx.close()


@pytest.fixture
async def signed_in_context(
    context: SessionContext, fake_backend: FakeBackend,
) -> SessionContext:
    """A started session context with an existing user signed in."""
    fake_backend.add_account(TEST_EMAIL, TEST_PASSWORD, TEST_NAME)
    result = await context.sign_in(TEST_EMAIL, TEST_PASSWORD)
    assert result.ok
    return context


def _health_transport(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"name": "GoTrue"})


@pytest.fixture
async def client(
    settings: Settings, fake_backend: FakeBackend,
) -> AsyncGenerator[AsyncClient]:
    """
    Test client for the web app.

    Every browser session gets its own fake SDK client over `fake_backend`.
    """
    from api.main import app, init_app_state

    async def context_factory() -> SessionContext:
        return SessionContext(FakeSupabaseClient(fake_backend))

    backend = Backend(
        settings.supabase_url,
        settings.supabase_anon_key,
        transport=httpx.MockTransport(_health_transport),
    )
    init_app_state(app, settings, backend, context_factory)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.state.sessions.close_all()


@pytest.fixture
async def signed_in_client(client: AsyncClient, fake_backend: FakeBackend) -> AsyncClient:
    """Test client whose browser session is signed in."""
    fake_backend.add_account(TEST_EMAIL, TEST_PASSWORD, TEST_NAME)
    response = await client.post(
        "/login", data={"email": TEST_EMAIL, "password": TEST_PASSWORD},
    )
    assert response.status_code == 303
    return client
