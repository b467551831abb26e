"""Service metadata endpoints."""

from fastapi import APIRouter

from ... import config
from .. import __version__
from ..models import HealthResponse, VersionResponse
from ..service import RenderService

router = APIRouter(tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Report whether the bundled template, stylesheet and UI script load."""
    assets = RenderService.asset_status()
    return HealthResponse(
        status="healthy" if all(assets.values()) else "degraded",
        version=__version__,
        assets=assets,
    )


@router.get("/version", response_model=VersionResponse)
def version_info() -> VersionResponse:
    return VersionResponse(
        version=__version__,
        api_version="v1",
        supported_formats=list(config.OUTPUT_FORMATS),
        supported_styles=list(config.STYLES),
        diff_modes=list(config.DIFF_MODES),
        summary_modes=list(config.SUMMARY_MODES),
    )


@router.get("/", include_in_schema=False)
def root() -> dict:
    return {
        "name": "diffview API",
        "version": __version__,
        "endpoints": {
            "render": "POST /render",
            "health": "GET /health",
            "version": "GET /version",
        },
    }
