"""Background image and panel opacity schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class BackgroundResponse(BaseModel):
    pc: str
    mobile: str


class BackgroundUpdateRequest(BaseModel):
    """Set one background image; ``key`` is ``bg:pc`` or ``bg:mobile``."""

    key: str = ""
    url: str | None = None


class OpacityResponse(BaseModel):
    card: float
    article: float
    sidebar: float
    editor: float


class OpacityUpdateRequest(BaseModel):
    """Set one panel opacity.

    ``value`` is passed through untouched; anything that does not parse as a
    non-zero number is stored as the fallback opacity.
    """

    key: str = ""
    value: Any = None
