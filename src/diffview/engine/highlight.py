"""Inline change highlighting between a deleted and an inserted line."""

import difflib
import html
import re
from typing import List, Tuple

_WORD_PATTERN = re.compile(r"\w+|\s+|[^\w\s]")


def escape_html(text: str) -> str:
    """Escape diff text for HTML, slashes included.

    Encoding ``/`` keeps comment-style template markers such as
    ``//diff2html-synchronisedScroll`` from surviving in rendered content.
    """
    return html.escape(text).replace("/", "&#47;")


def _tokenize(text: str, char_by_char: bool) -> List[str]:
    if char_by_char:
        return list(text)
    return _WORD_PATTERN.findall(text)


def highlight_pair(
    old: str,
    new: str,
    *,
    char_by_char: bool = False,
    max_line_length: int = 10_000,
) -> Tuple[str, str]:
    """Return escaped HTML for both sides with changed runs wrapped.

    ``old`` and ``new`` are line contents without their diff prefix. Removed
    runs are wrapped in ``<del>`` on the old side and added runs in ``<ins>``
    on the new side. Lines longer than ``max_line_length`` are only escaped.
    """
    if len(old) > max_line_length or len(new) > max_line_length:
        return escape_html(old), escape_html(new)

    old_tokens = _tokenize(old, char_by_char)
    new_tokens = _tokenize(new, char_by_char)
    matcher = difflib.SequenceMatcher(None, old_tokens, new_tokens, autojunk=False)

    old_html: List[str] = []
    new_html: List[str] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        old_chunk = escape_html("".join(old_tokens[i1:i2]))
        new_chunk = escape_html("".join(new_tokens[j1:j2]))
        if tag == "equal":
            old_html.append(old_chunk)
            new_html.append(new_chunk)
            continue
        if old_chunk:
            old_html.append(f"<del>{old_chunk}</del>")
        if new_chunk:
            new_html.append(f"<ins>{new_chunk}</ins>")

    return "".join(old_html), "".join(new_html)
