"""Service layer for the diffview API, shared with the CLI pipeline."""

import logging
import os
from typing import Any, Dict

from .. import engine
from ..config import RenderConfig
from ..errors import DiffViewError
from ..render import get_output

logger = logging.getLogger(__name__)


class RenderService:
    """Runs the render stage for diffs posted to the API."""

    @staticmethod
    def asset_status() -> Dict[str, bool]:
        """Map each bundled render asset to whether it can be opened."""
        assets = {
            "template": engine.DEFAULT_TEMPLATE_PATH,
            "css": engine.CSS_PATH,
            "js_ui": engine.JS_UI_PATH,
        }
        return {name: os.access(path, os.R_OK) for name, path in assets.items()}

    def process_render_request(
        self,
        diff: str,
        format: str = "html",
        style: str = "line",
        summary: str = "closed",
        diff_mode: str = "word",
        synchronised_scroll: str = "disabled",
        max_line_length_highlight: int = 10_000,
    ) -> Dict[str, Any]:
        """Render a diff and wrap the outcome in an ``ok`` envelope.

        The bundled wrapper template is always used; callers of the API
        cannot point the renderer at files on the server.
        """
        try:
            config = RenderConfig(
                diff=diff_mode,
                format=format,
                style=style,
                summary=summary,
                synchronised_scroll=synchronised_scroll,
                max_line_length_highlight=max_line_length_highlight,
            )
            content = get_output(config, diff)
            return {"ok": True, "data": {"format": format, "content": content}}

        except DiffViewError as e:
            logger.info("Render request rejected", extra={"code": e.code})
            return {"ok": False, "error": e.to_dict()}
