"""API route registration for diffview."""

from fastapi import APIRouter

from . import meta, render

router = APIRouter()
router.include_router(meta.router)
router.include_router(render.router)

__all__ = ["router"]
