"""Health check endpoints."""
import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.dependencies import get_backend
from core.backend import Backend

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    backend: str


@router.get("/health", response_model=HealthResponse)
async def health_check(
    backend: Backend = Depends(get_backend),
) -> HealthResponse:
    """
    Check application and backend health.

    The app reports 'degraded' rather than failing when the backend is
    unreachable: pages still render, data operations show an error notice.
    """
    backend_ok = await backend.ping()
    if not backend_ok:
        logger.warning("Backend unavailable")
    return HealthResponse(
        status="healthy" if backend_ok else "degraded",
        backend="connected" if backend_ok else "unavailable",
    )
