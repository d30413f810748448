"""FastAPI application entry point."""
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.routers import auth, dashboard, health
from core.backend import Backend
from core.config import Settings, get_settings
from core.sessions import ContextFactory, SessionRegistry, backend_context_factory

# Paths served without a browser session
SESSIONLESS_PREFIXES = ("/health", "/docs", "/openapi.json")


def init_app_state(
    app: FastAPI,
    settings: Settings,
    backend: Backend,
    context_factory: ContextFactory | None = None,
) -> None:
    """Attach settings, the backend handle and the session registry to the app."""
    app.state.settings = settings
    app.state.backend = backend
    app.state.sessions = SessionRegistry(
        context_factory or backend_context_factory(backend),
        idle_timeout=settings.session_idle_timeout,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """
    Manage application lifespan - startup and shutdown.

    Missing Supabase credentials fail here, before any request is served.
    """
    app_settings = get_settings()
    init_app_state(app, app_settings, Backend.from_settings(app_settings))

    yield

    # Shutdown: end every session-change subscription
    app.state.sessions.close_all()


class BrowserSessionMiddleware(BaseHTTPMiddleware):
    """Bind each page request to its browser session, opening one if needed."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Resolve the session from the cookie and set the cookie for new sessions."""
        if request.url.path.startswith(SESSIONLESS_PREFIXES):
            return await call_next(request)

        settings: Settings = request.app.state.settings
        registry: SessionRegistry = request.app.state.sessions

        session, created = await registry.resolve(
            request.cookies.get(settings.session_cookie_name),
        )
        if not created:
            # Picks up token refreshes and sign-outs made elsewhere
            await session.context.refresh()
        request.state.browser_session = session

        response = await call_next(request)
        if created:
            response.set_cookie(
                settings.session_cookie_name,
                session.id,
                httponly=True,
                samesite="lax",
                secure=settings.session_cookie_secure,
            )
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        # Pages are never framed
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


app = FastAPI(
    title="NoteKeeper",
    description="Save and manage a private list of links.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(BrowserSessionMiddleware)
app.add_middleware(SecurityHeadersMiddleware)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(dashboard.router)
