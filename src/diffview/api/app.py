"""FastAPI application for rendering diffs over HTTP."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..logging_utils import configure_logging
from . import __version__
from .routes import router as api_router
from .service import RenderService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    missing = [name for name, ok in RenderService.asset_status().items() if not ok]
    if missing:
        logger.warning("Bundled render assets unreadable", extra={"assets": missing})
    yield


def create_app() -> FastAPI:
    """Build the API application with routes and error handling attached."""
    configure_logging()

    application = FastAPI(
        title="diffview API",
        description="Render unified diffs as a self-contained HTML page or a JSON diff model",
        version=__version__,
        lifespan=lifespan,
    )
    # Rendering is stateless and read-only, so any origin may call it.
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )
    application.include_router(api_router)

    @application.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Render API failure", extra={"path": request.url.path})
        return JSONResponse(
            status_code=500,
            content={
                "ok": False,
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "Unexpected error while rendering the diff",
                    "details": {"exception_type": type(exc).__name__},
                },
            },
        )

    return application


app = create_app()
