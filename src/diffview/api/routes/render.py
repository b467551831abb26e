"""Render routes for the diffview API."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..models import RenderRequest
from ..service import RenderService

router = APIRouter(tags=["render"])

logger = logging.getLogger(__name__)

render_service = RenderService()


@router.post("/render")
def render_diff(request: RenderRequest) -> JSONResponse:
    """Render a unified diff as HTML or as the JSON diff model."""
    logger.info(
        "Received render request",
        extra={"format": request.format, "style": request.style, "chars": len(request.diff)},
    )

    result = render_service.process_render_request(
        diff=request.diff,
        format=request.format,
        style=request.style,
        summary=request.summary,
        diff_mode=request.diff_mode,
        synchronised_scroll=request.synchronised_scroll,
        max_line_length_highlight=request.max_line_length_highlight,
    )
    if not result["ok"]:
        return JSONResponse(status_code=400, content=result)

    logger.info("Render request completed", extra={"format": request.format})
    return JSONResponse(content=result)
