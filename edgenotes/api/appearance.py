"""Background image and opacity endpoints."""

from __future__ import annotations

import logging
from typing import Annotated, Any, TypeVar

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from edgenotes.api.deps import get_page_store, read_fields, require_session
from edgenotes.schemas.appearance import (
    BackgroundResponse,
    BackgroundUpdateRequest,
    OpacityResponse,
    OpacityUpdateRequest,
)
from edgenotes.services.page_service import PageStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["appearance"])

_Body = TypeVar("_Body", bound=BaseModel)


async def _parse_body(request: Request, model: type[_Body]) -> _Body:
    """Validate the request body against ``model``.

    The body is read inside the handler so the session check always runs
    before the body is looked at.
    """
    fields: dict[str, Any] = await read_fields(request)
    try:
        return model.model_validate(fields)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc


@router.get("/bg", response_model=BackgroundResponse)
async def get_background(
    page_store: Annotated[PageStore, Depends(get_page_store)],
) -> BackgroundResponse:
    return BackgroundResponse(**await page_store.get_background_images())


@router.post(
    "/save-bg",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_session)],
)
async def save_background(
    request: Request,
    page_store: Annotated[PageStore, Depends(get_page_store)],
) -> Response:
    body = await _parse_body(request, BackgroundUpdateRequest)
    await page_store.save_background_image(body.key, body.url)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/opacity", response_model=OpacityResponse)
async def get_opacity(
    page_store: Annotated[PageStore, Depends(get_page_store)],
) -> OpacityResponse:
    return OpacityResponse(**await page_store.get_opacity_settings())


@router.post(
    "/save-opacity",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_session)],
)
async def save_opacity(
    request: Request,
    page_store: Annotated[PageStore, Depends(get_page_store)],
) -> Response:
    """Store one panel opacity, clamped to the supported range."""
    body = await _parse_body(request, OpacityUpdateRequest)
    opacity = await page_store.save_opacity_setting(body.key, body.value)
    logger.debug("Saved %s opacity as %s", body.key, opacity)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
