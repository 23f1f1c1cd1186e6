"""Authentication API endpoints."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status

from edgenotes.api.deps import get_session_guard, read_fields
from edgenotes.services.session_service import SessionGuard

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])

ADMIN_PATH = "/admin"


def _redirect_with_cookie(cookie: str) -> Response:
    response = Response(status_code=status.HTTP_302_FOUND, headers={"Location": ADMIN_PATH})
    response.headers.append("Set-Cookie", cookie)
    return response


@router.post("/login", status_code=status.HTTP_302_FOUND)
async def login(
    request: Request,
    guard: Annotated[SessionGuard, Depends(get_session_guard)],
) -> Response:
    """Check the admin password and start a session.

    Accepts a JSON or form-encoded ``password`` field.
    """
    fields = await read_fields(request)
    password = fields.get("password")
    # AuthenticationError propagates to the global 401 handler.
    token = guard.login(password if isinstance(password, str) else None)
    logger.info("Admin session started")
    return _redirect_with_cookie(guard.session_cookie(token))


@router.post("/logout", status_code=status.HTTP_302_FOUND)
async def logout(
    guard: Annotated[SessionGuard, Depends(get_session_guard)],
) -> Response:
    """End the session by expiring the cookie."""
    return _redirect_with_cookie(guard.cleared_cookie())
