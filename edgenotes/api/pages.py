"""Page API endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status

from edgenotes.api.deps import get_page_store, read_fields, require_session
from edgenotes.exceptions import PageValidationError
from edgenotes.schemas.page import PageContentResponse, PageCreateResponse, PageListResponse
from edgenotes.services.page_service import DEFAULT_PAGE_ID, PageStore, require_valid_page_id

router = APIRouter(prefix="/api", tags=["pages"])


@router.get("/pages", response_model=PageListResponse)
async def list_pages(
    page_store: Annotated[PageStore, Depends(get_page_store)],
) -> PageListResponse:
    """List page ids in display order."""
    pages = await page_store.list_pages()
    return PageListResponse(pages=list(pages))


@router.get("/page/{page_id}", response_model=PageContentResponse)
async def get_page(
    page_id: str,
    page_store: Annotated[PageStore, Depends(get_page_store)],
) -> PageContentResponse:
    """Get page content; unknown pages read as empty."""
    require_valid_page_id(page_id)
    return PageContentResponse(content=await page_store.get_page(page_id))


@router.post(
    "/pages",
    response_model=PageCreateResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_session)],
)
async def create_page(
    request: Request,
    page_store: Annotated[PageStore, Depends(get_page_store)],
) -> PageCreateResponse:
    """Create an empty page from a JSON or form-encoded ``name``."""
    fields = await read_fields(request)
    page_id = await page_store.create_page(fields.get("name", ""))
    return PageCreateResponse(id=page_id, title=await page_store.get_title(page_id))


@router.post(
    "/delete/{page_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_session)],
)
async def delete_page(
    page_id: str,
    page_store: Annotated[PageStore, Depends(get_page_store)],
) -> Response:
    """Delete a page. The default page cannot be deleted."""
    require_valid_page_id(page_id)
    await page_store.delete_page(page_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/save",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_session)],
)
async def save_page(
    request: Request,
    page_store: Annotated[PageStore, Depends(get_page_store)],
) -> Response:
    """Overwrite page content.

    JSON and form bodies carry ``pageId`` and ``content``; any other content
    type is saved verbatim to the default page.
    """
    content_type = request.headers.get("content-type", "")
    if "application/json" in content_type or "application/x-www-form-urlencoded" in content_type:
        fields = await read_fields(request)
        page_id = fields.get("pageId") or DEFAULT_PAGE_ID
        content = fields.get("content") or ""
    else:
        page_id = DEFAULT_PAGE_ID
        content = (await request.body()).decode("utf-8")

    if not isinstance(page_id, str):
        raise PageValidationError("Invalid page ID")
    if not isinstance(content, str):
        raise PageValidationError("Page content must be text")
    require_valid_page_id(page_id)
    await page_store.save_page(page_id, content)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
