"""Rendering: diff model generation and HTML document assembly."""

import json
import logging
import re
from pathlib import Path
from typing import Any, Callable, Dict, Tuple

from . import engine
from .config import OUTPUT_FORMATS, RenderConfig
from .errors import TemplateNotFoundError, UnsupportedFormatError
from .executor import read_file

logger = logging.getLogger(__name__)

CSS_MARKER = "<!--diff2html-css-->"
JS_UI_MARKER = "<!--diff2html-js-ui-->"
FILE_LIST_MARKER = "//diff2html-fileListCloseable"
SYNC_SCROLL_MARKER = "//diff2html-synchronisedScroll"
CONTENT_MARKER = "<!--diff2html-diff-->"


def _js_bool(value: Any) -> str:
    return "true" if value else "false"


# Each marker is replaced once by the payload its producer builds from the
# document parts (css, js, content, showFilesOpen, synchronisedScroll).
MARKERS: Tuple[Tuple[str, Callable[[Dict[str, Any]], str]], ...] = (
    (CSS_MARKER, lambda parts: f"<style>\n{parts['css']}\n</style>"),
    (JS_UI_MARKER, lambda parts: f"<script>\n{parts['js']}\n</script>"),
    (
        FILE_LIST_MARKER,
        lambda parts: 'diff2htmlUi.fileListCloseable("#diff", '
        f"{_js_bool(parts['showFilesOpen'])});",
    ),
    (
        SYNC_SCROLL_MARKER,
        lambda parts: 'diff2htmlUi.synchronisedScroll("#diff", '
        f"{_js_bool(parts['synchronisedScroll'])});",
    ),
    (CONTENT_MARKER, lambda parts: parts["content"]),
)

_MARKER_PATTERN = re.compile("|".join(re.escape(marker) for marker, _ in MARKERS))


def assemble_document(template: str, parts: Dict[str, Any]) -> str:
    """Substitute every known marker in ``template`` once.

    The template is scanned a single time, so payloads are never searched for
    markers themselves. Markers missing from the template are skipped.
    """
    producers = dict(MARKERS)
    replaced = set()

    def _substitute(match: re.Match) -> str:
        marker = match.group(0)
        if marker in replaced:
            return marker
        replaced.add(marker)
        return producers[marker](parts)

    document = _MARKER_PATTERN.sub(_substitute, template)
    logger.debug(
        "Assembled HTML document",
        extra={"markers_replaced": sorted(replaced), "chars": len(document)},
    )
    return document


def serialize_model(model: engine.DiffModel) -> str:
    """Compact JSON serialization of the diff model."""
    return json.dumps(model, ensure_ascii=False, separators=(",", ":"))


def prepare_html(content: str, template_path: Path, options: Dict[str, Any]) -> str:
    """Wrap rendered diff content in the template with inline assets."""
    parts = {
        "css": read_file(engine.CSS_PATH),
        "js": read_file(engine.JS_UI_PATH),
        "content": content,
        "showFilesOpen": options.get("showFilesOpen", False),
        "synchronisedScroll": options.get("synchronisedScroll", False),
    }
    return assemble_document(read_file(template_path), parts)


def get_output(config: RenderConfig, raw_diff: str) -> str:
    """Render ``raw_diff`` as JSON or as a full HTML document."""
    if config.format not in OUTPUT_FORMATS:
        raise UnsupportedFormatError(config.format)

    template_path = config.resolve_template()
    if not template_path.exists():
        raise TemplateNotFoundError(str(template_path))

    logger.info(
        "Rendering diff",
        extra={"format": config.format, "style": config.style, "diff": config.diff},
    )
    model = engine.to_json_model(raw_diff, config.to_renderer_options())

    if config.format == "json":
        return serialize_model(model)

    options = config.to_html_options()
    content = engine.to_pretty_html(model, options)
    return prepare_html(content, template_path, options)
