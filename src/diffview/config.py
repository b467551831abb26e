"""Configuration management for diffview."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .engine import DEFAULT_TEMPLATE_PATH

DIFF_MODES = ("word", "char", "none")
STYLES = ("line", "side")
SUMMARY_MODES = ("closed", "open", "hidden")
SCROLL_MODES = ("enabled", "disabled")
OUTPUT_FORMATS = ("html", "json")


@dataclass(frozen=True)
class RenderConfig:
    """User-facing rendering options, built once per invocation."""

    # Diff granularity and document format
    diff: str = "word"
    format: str = "html"

    # HTML layout
    style: str = "line"
    summary: str = "closed"
    synchronised_scroll: str = "disabled"

    # Wrapper template override
    template: Optional[str] = None

    # Lines longer than this are rendered without inline highlights
    max_line_length_highlight: int = 10_000

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.diff not in DIFF_MODES:
            raise ValueError(f"diff must be one of {', '.join(DIFF_MODES)}")
        if self.style not in STYLES:
            raise ValueError(f"style must be one of {', '.join(STYLES)}")
        if self.summary not in SUMMARY_MODES:
            raise ValueError(f"summary must be one of {', '.join(SUMMARY_MODES)}")
        if self.synchronised_scroll not in SCROLL_MODES:
            raise ValueError(
                f"synchronised_scroll must be one of {', '.join(SCROLL_MODES)}"
            )
        if self.max_line_length_highlight < 0:
            raise ValueError("max_line_length_highlight cannot be negative")

    @property
    def word_by_word(self) -> bool:
        return self.diff == "word"

    @property
    def char_by_char(self) -> bool:
        return self.diff == "char"

    @property
    def output_format(self) -> str:
        return "side-by-side" if self.style == "side" else "line-by-line"

    @property
    def show_files(self) -> bool:
        return self.summary != "hidden"

    @property
    def show_files_open(self) -> bool:
        return self.summary == "open"

    @property
    def synchronised_scroll_enabled(self) -> bool:
        return self.synchronised_scroll == "enabled"

    def resolve_template(self) -> Path:
        """Return the wrapper template path, falling back to the bundled one."""
        if self.template:
            return Path(self.template)
        return DEFAULT_TEMPLATE_PATH

    def to_renderer_options(self) -> Dict[str, Any]:
        """Build a fresh option mapping for the rendering engine."""
        return {
            "wordByWord": self.word_by_word,
            "charByChar": self.char_by_char,
            "maxLineLengthHighlight": self.max_line_length_highlight,
        }

    def to_html_options(self) -> Dict[str, Any]:
        """Renderer options for the HTML branch, layered on the base ones."""
        options = self.to_renderer_options()
        options.update(
            {
                "inputFormat": "json",
                "outputFormat": self.output_format,
                "showFiles": self.show_files,
                "showFilesOpen": self.show_files_open,
                "synchronisedScroll": self.synchronised_scroll_enabled,
            }
        )
        return options
