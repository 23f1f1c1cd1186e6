"""HTML views: public reading page and admin editor."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from edgenotes.api.deps import get_page_store, get_session_guard, is_authenticated
from edgenotes.services.page_service import DEFAULT_PAGE_ID, MAX_PAGE_NAME_LENGTH, PageStore
from edgenotes.services.session_service import SessionGuard

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
WELCOME_TEXT = "Welcome to Edge Notes! Sign in at /admin to start editing."

# Characters kept as-is inside CSS url(). Quotes, parentheses, backslashes,
# semicolons and whitespace are percent-encoded so a stored URL cannot end
# the url() token.
CSS_URL_SAFE = ":/?#[]@!$&*+,=%~"


def css_url(value: str) -> str:
    """Percent-encode a URL for use inside a CSS ``url("...")``."""
    return quote(value, safe=CSS_URL_SAFE)


templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["css_url"] = css_url

router = APIRouter(tags=["views"], include_in_schema=False)


async def _page_context(page_store: PageStore, fallback_content: str) -> dict[str, Any]:
    pages = await page_store.list_page_records()
    first_id = pages[0].id
    return {
        "pages": pages,
        "current_id": first_id,
        "content": await page_store.get_page(first_id, default=fallback_content),
        "background": await page_store.get_background_images(),
        "opacity": await page_store.get_opacity_settings(),
    }


@router.get("/", response_class=HTMLResponse)
async def public_page(
    request: Request,
    page_store: Annotated[PageStore, Depends(get_page_store)],
) -> HTMLResponse:
    context = await _page_context(page_store, WELCOME_TEXT)
    return templates.TemplateResponse(request, "public.html", context)


@router.get("/admin", response_class=HTMLResponse)
async def admin_page(
    request: Request,
    page_store: Annotated[PageStore, Depends(get_page_store)],
    guard: Annotated[SessionGuard, Depends(get_session_guard)],
) -> HTMLResponse:
    if not is_authenticated(request, guard):
        return templates.TemplateResponse(request, "login.html", {})

    context = await _page_context(page_store, "")
    context["default_page_id"] = DEFAULT_PAGE_ID
    context["max_name_length"] = MAX_PAGE_NAME_LENGTH
    return templates.TemplateResponse(request, "admin.html", context)
