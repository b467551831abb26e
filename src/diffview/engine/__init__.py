"""Bundled diff rendering engine.

The rest of diffview only talks to this package through two calls:

* ``to_json_model(raw_diff, options)`` parses unified diff text into the JSON
  diff model, a list of file dictionaries.
* ``to_pretty_html(diff_input, options)`` renders a model (or raw diff text
  when ``options["inputFormat"]`` is not ``"json"``) into an HTML fragment.

Static assets used by wrapper templates live next to this module.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .parser import DiffParser
from .renderer import HtmlRenderer

PACKAGE_DIR = Path(__file__).resolve().parent
STATIC_DIR = PACKAGE_DIR / "static"
CSS_PATH = STATIC_DIR / "diff2html.min.css"
JS_UI_PATH = STATIC_DIR / "diff2html-ui.min.js"
DEFAULT_TEMPLATE_PATH = PACKAGE_DIR / "templates" / "template.html"

DiffModel = List[Dict[str, Any]]


def to_json_model(raw_diff: str, options: Optional[Dict[str, Any]] = None) -> DiffModel:
    """Parse unified diff text into the JSON diff model."""
    return [diff_file.to_dict() for diff_file in DiffParser().parse(raw_diff)]


def to_pretty_html(
    diff_input: Union[str, DiffModel], options: Optional[Dict[str, Any]] = None
) -> str:
    """Render a diff model, or raw diff text, as an HTML fragment."""
    options = options or {}
    if options.get("inputFormat") == "json":
        model = diff_input
    else:
        model = to_json_model(diff_input, options)
    return HtmlRenderer(options).render(model)


__all__ = [
    "CSS_PATH",
    "DEFAULT_TEMPLATE_PATH",
    "JS_UI_PATH",
    "STATIC_DIR",
    "DiffModel",
    "to_json_model",
    "to_pretty_html",
]
