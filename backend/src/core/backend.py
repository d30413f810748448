"""Configured handle to the hosted Supabase backend."""
import logging

import httpx
from supabase import AsyncClient, acreate_client
from supabase.lib.client_options import AsyncClientOptions

from core.config import Settings

logger = logging.getLogger(__name__)

AUTH_HEALTH_PATH = "/auth/v1/health"


class Backend:
    """
    Holds the validated endpoint and public API key for the backend service.

    Built once at startup. The SDK client keeps per-user auth state (tokens,
    session-change listeners), so every browser session gets its own client
    from `connect()` rather than sharing one across users.
    """

    def __init__(
        self,
        url: str,
        anon_key: str,
        health_check_timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not url or not anon_key:
            raise ValueError("Missing Supabase environment variables")
        self._url = url.rstrip("/")
        self._anon_key = anon_key
        self._health_check_timeout = health_check_timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "Backend":
        """Create the backend handle from application settings."""
        return cls(
            url=settings.supabase_url,
            anon_key=settings.supabase_anon_key,
            health_check_timeout=settings.health_check_timeout,
        )

    @property
    def url(self) -> str:
        return self._url

    async def connect(self) -> AsyncClient:
        """
        Create an SDK client for one browser session.

        Token refresh happens on demand when the session is read, so the SDK's
        background refresh timer is disabled.
        """
        options = AsyncClientOptions(auto_refresh_token=False, persist_session=True)
        return await acreate_client(self._url, self._anon_key, options=options)

    async def ping(self) -> bool:
        """Check that the auth service answers its health endpoint."""
        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self._health_check_timeout,
            ) as client:
                response = await client.get(
                    f"{self._url}{AUTH_HEALTH_PATH}",
                    headers={"apikey": self._anon_key},
                )
            return response.status_code == 200
        except httpx.HTTPError:
            logger.warning("Backend health check failed", exc_info=True)
            return False
