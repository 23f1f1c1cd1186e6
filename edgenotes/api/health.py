"""Health check endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from pydantic import BaseModel

from edgenotes import __version__

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    version: str
    store: str


@router.get("/api/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint for monitoring and load balancers."""
    store_status = "ok"
    try:
        if not await request.app.state.store.ping():
            store_status = "error"
    except Exception:
        logger.warning("Health check store ping failed", exc_info=True)
        store_status = "error"

    return HealthResponse(
        status="ok" if store_status == "ok" else "degraded",
        version=__version__,
        store=store_status,
    )
