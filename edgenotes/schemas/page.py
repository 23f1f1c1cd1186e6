"""Page-related schemas."""

from __future__ import annotations

from pydantic import BaseModel


class PageListResponse(BaseModel):
    """Page ids in display order."""

    pages: list[str]


class PageContentResponse(BaseModel):
    """Page content response."""

    content: str


class PageCreateResponse(BaseModel):
    """Identifier and stored title of a newly created page."""

    id: str
    title: str
