"""Shared API dependencies: settings, store, session guard, request bodies."""

from __future__ import annotations

import json
import logging
from typing import Annotated, Any

from fastapi import Depends, HTTPException, Request, status

from edgenotes.config import Settings
from edgenotes.services.page_service import PageStore
from edgenotes.services.session_service import SessionGuard

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    """Get application settings from app state."""
    settings: Settings = request.app.state.settings
    return settings


def get_session_guard(request: Request) -> SessionGuard:
    """Get the session guard from app state."""
    guard: SessionGuard = request.app.state.session_guard
    return guard


def get_page_store(request: Request) -> PageStore:
    """Get a page store bound to the application's key-value store."""
    return PageStore(request.app.state.store)


def is_authenticated(request: Request, guard: SessionGuard) -> bool:
    return guard.is_authed(request.headers.get("cookie"))


async def require_session(
    request: Request,
    guard: Annotated[SessionGuard, Depends(get_session_guard)],
) -> None:
    """Require a valid admin session cookie. Raises 403 otherwise."""
    if not is_authenticated(request, guard):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")


async def read_fields(request: Request) -> dict[str, Any]:
    """Read a JSON or form-encoded body into a plain dict.

    Malformed or non-object JSON reads as an empty dict, so missing fields
    fall back to their defaults instead of failing the request.
    """
    content_type = request.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            data = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.debug("Ignoring malformed JSON body", exc_info=True)
            return {}
        return data if isinstance(data, dict) else {}
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}
