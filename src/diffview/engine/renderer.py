"""HTML rendering of the JSON diff model."""

import hashlib
import logging
from typing import Any, Dict, List, Optional, Tuple

from .highlight import escape_html, highlight_pair
from .parser import DEV_NULL, LINE_CONTEXT, LINE_DELETE, LINE_INSERT

logger = logging.getLogger(__name__)

LINE_BY_LINE = "line-by-line"
SIDE_BY_SIDE = "side-by-side"

_ROW_CLASSES = {
    LINE_INSERT: "d2h-ins",
    LINE_DELETE: "d2h-del",
    LINE_CONTEXT: "d2h-cntx",
}


def file_id(diff_file: Dict[str, Any], index: int) -> str:
    """Stable anchor id for a file, shared by the file list and the wrapper."""
    key = f"{index}:{diff_file.get('oldName', '')}:{diff_file.get('newName', '')}"
    return "d2h-" + hashlib.sha1(key.encode("utf-8")).hexdigest()[:6]


def display_name(diff_file: Dict[str, Any]) -> str:
    old_name = diff_file.get("oldName") or ""
    new_name = diff_file.get("newName") or ""
    if old_name and new_name and old_name != new_name and DEV_NULL not in (old_name, new_name):
        return f"{old_name} → {new_name}"
    if new_name and new_name != DEV_NULL:
        return new_name
    return old_name


def _file_tag(diff_file: Dict[str, Any]) -> Tuple[str, str]:
    if diff_file.get("isNew"):
        return "d2h-added", "ADDED"
    if diff_file.get("isDeleted"):
        return "d2h-deleted", "DELETED"
    if diff_file.get("isRename"):
        return "d2h-moved", "RENAMED"
    if diff_file.get("isCopy"):
        return "d2h-moved", "COPIED"
    return "d2h-changed", "CHANGED"


class HtmlRenderer:
    """Renders a diff model as diff2html-compatible markup."""

    def __init__(self, options: Optional[Dict[str, Any]] = None):
        options = options or {}
        self.output_format = options.get("outputFormat", LINE_BY_LINE)
        self.show_files = options.get("showFiles", True)
        self.char_by_char = bool(options.get("charByChar"))
        self.highlight = bool(options.get("wordByWord")) or self.char_by_char
        self.max_line_length = int(options.get("maxLineLengthHighlight", 10_000))

    def render(self, model: List[Dict[str, Any]]) -> str:
        parts: List[str] = []
        if self.show_files:
            parts.append(self.render_file_list(model))

        body = [self.render_file(diff_file, index) for index, diff_file in enumerate(model)]
        parts.append('<div class="d2h-wrapper">\n' + "\n".join(body) + "\n</div>")

        logger.debug(
            "Rendered HTML diff",
            extra={"files": len(model), "output_format": self.output_format},
        )
        return "\n".join(parts)

    def render_file_list(self, model: List[Dict[str, Any]]) -> str:
        items = []
        for index, diff_file in enumerate(model):
            items.append(
                '<li class="d2h-file-list-line">'
                '<span class="d2h-file-name-wrapper">'
                f'<a href="#{file_id(diff_file, index)}" class="d2h-file-name">'
                f"{escape_html(display_name(diff_file))}</a>"
                '<span class="d2h-file-stats">'
                f'<span class="d2h-lines-added">+{diff_file.get("addedLines", 0)}</span>'
                f'<span class="d2h-lines-deleted">-{diff_file.get("deletedLines", 0)}</span>'
                "</span></span></li>"
            )
        return (
            '<div class="d2h-file-list-wrapper">\n'
            '<div class="d2h-file-list-header">'
            f'<span class="d2h-file-list-title">Files changed ({len(model)})</span>'
            '<a class="d2h-file-switch d2h-hide">hide</a>'
            '<a class="d2h-file-switch d2h-show">show</a>'
            "</div>\n"
            '<ol class="d2h-file-list">\n' + "\n".join(items) + "\n</ol>\n</div>"
        )

    def render_file(self, diff_file: Dict[str, Any], index: int) -> str:
        tag_class, tag_label = _file_tag(diff_file)
        header = (
            '<div class="d2h-file-header">'
            '<span class="d2h-file-name-wrapper">'
            f'<span class="d2h-file-name">{escape_html(display_name(diff_file))}</span>'
            f'<span class="d2h-tag {tag_class}">{tag_label}</span>'
            "</span></div>"
        )

        if self.output_format == SIDE_BY_SIDE:
            body = self._side_by_side(diff_file)
        else:
            body = self._line_by_line(diff_file)

        return (
            f'<div id="{file_id(diff_file, index)}" class="d2h-file-wrapper" '
            f'data-lang="{escape_html(diff_file.get("language") or "")}">\n'
            f"{header}\n{body}\n</div>"
        )

    # Line-by-line layout

    def _line_by_line(self, diff_file: Dict[str, Any]) -> str:
        rows: List[str] = []
        blocks = diff_file.get("blocks") or []
        if not blocks:
            rows.append(self._empty_row(diff_file, colspan=2))

        for block in blocks:
            rows.append(
                '<tr><td class="d2h-code-linenumber d2h-info"></td>'
                f'<td class="d2h-info"><div class="d2h-code-line">{escape_html(block["header"])}</div></td></tr>'
            )
            for kind, payload in self._group_changes(block.get("lines", [])):
                if kind == LINE_CONTEXT:
                    rows.append(self._unified_row(payload, escape_html(payload["content"][1:])))
                    continue
                old_rows: List[str] = []
                new_rows: List[str] = []
                for old_line, new_line in payload:
                    old_html, new_html = self._highlight(old_line, new_line)
                    if old_line is not None:
                        old_rows.append(self._unified_row(old_line, old_html))
                    if new_line is not None:
                        new_rows.append(self._unified_row(new_line, new_html))
                rows.extend(old_rows + new_rows)

        return (
            '<div class="d2h-file-diff"><div class="d2h-code-wrapper">'
            '<table class="d2h-diff-table"><tbody class="d2h-diff-tbody">\n'
            + "\n".join(rows)
            + "\n</tbody></table></div></div>"
        )

    def _unified_row(self, line: Dict[str, Any], content_html: str) -> str:
        css = _ROW_CLASSES[line["type"]]
        old_number = line.get("oldNumber")
        new_number = line.get("newNumber")
        return (
            f'<tr><td class="d2h-code-linenumber {css}">'
            f'<div class="line-num1">{"" if old_number is None else old_number}</div>'
            f'<div class="line-num2">{"" if new_number is None else new_number}</div></td>'
            f'<td class="{css}"><div class="d2h-code-line">'
            f'<span class="d2h-code-line-prefix">{escape_html(line["content"][:1])}</span>'
            f'<span class="d2h-code-line-ctn">{content_html}</span></div></td></tr>'
        )

    # Side-by-side layout

    def _side_by_side(self, diff_file: Dict[str, Any]) -> str:
        left: List[str] = []
        right: List[str] = []
        blocks = diff_file.get("blocks") or []
        if not blocks:
            left.append(self._empty_row(diff_file, colspan=2))
            right.append(self._empty_row(diff_file, colspan=2))

        for block in blocks:
            header = (
                '<tr><td class="d2h-code-side-linenumber d2h-info"></td>'
                f'<td class="d2h-info"><div class="d2h-code-side-line">{escape_html(block["header"])}</div></td></tr>'
            )
            left.append(header)
            right.append(header)
            for kind, payload in self._group_changes(block.get("lines", [])):
                if kind == LINE_CONTEXT:
                    content = escape_html(payload["content"][1:])
                    left.append(self._side_row(payload, payload.get("oldNumber"), content))
                    right.append(self._side_row(payload, payload.get("newNumber"), content))
                    continue
                for old_line, new_line in payload:
                    old_html, new_html = self._highlight(old_line, new_line)
                    left.append(
                        self._side_row(old_line, old_line.get("oldNumber"), old_html)
                        if old_line is not None
                        else self._side_empty_row()
                    )
                    right.append(
                        self._side_row(new_line, new_line.get("newNumber"), new_html)
                        if new_line is not None
                        else self._side_empty_row()
                    )

        return (
            '<div class="d2h-files-diff">\n'
            + self._side_table(left)
            + "\n"
            + self._side_table(right)
            + "\n</div>"
        )

    @staticmethod
    def _side_table(rows: List[str]) -> str:
        return (
            '<div class="d2h-file-side-diff"><div class="d2h-code-wrapper">'
            '<table class="d2h-diff-table"><tbody class="d2h-diff-tbody">\n'
            + "\n".join(rows)
            + "\n</tbody></table></div></div>"
        )

    @staticmethod
    def _side_row(line: Dict[str, Any], number: Optional[int], content_html: str) -> str:
        css = _ROW_CLASSES[line["type"]]
        return (
            f'<tr><td class="d2h-code-side-linenumber {css}">{"" if number is None else number}</td>'
            f'<td class="{css}"><div class="d2h-code-side-line">'
            f'<span class="d2h-code-line-prefix">{escape_html(line["content"][:1])}</span>'
            f'<span class="d2h-code-line-ctn">{content_html}</span></div></td></tr>'
        )

    @staticmethod
    def _side_empty_row() -> str:
        return (
            '<tr><td class="d2h-code-side-linenumber d2h-code-side-emptyplaceholder d2h-cntx d2h-emptyplaceholder"></td>'
            '<td class="d2h-cntx d2h-emptyplaceholder"><div class="d2h-code-side-line">'
            '<span class="d2h-code-line-prefix">&nbsp;</span>'
            '<span class="d2h-code-line-ctn"><br></span></div></td></tr>'
        )

    # Shared helpers

    @staticmethod
    def _empty_row(diff_file: Dict[str, Any], colspan: int) -> str:
        message = "Binary file" if diff_file.get("isBinary") else "File without changes"
        return (
            f'<tr><td class="d2h-info" colspan="{colspan}">'
            f'<div class="d2h-code-line">{message}</div></td></tr>'
        )

    @staticmethod
    def _group_changes(lines: List[Dict[str, Any]]):
        """Yield context lines one by one and change runs as aligned pairs.

        A run of deletes followed by a run of inserts is zipped positionally
        into ``(old, new)`` pairs, with ``None`` on the shorter side.
        """
        index = 0
        while index < len(lines):
            line = lines[index]
            if line["type"] == LINE_CONTEXT:
                yield LINE_CONTEXT, line
                index += 1
                continue

            deletes: List[Dict[str, Any]] = []
            inserts: List[Dict[str, Any]] = []
            while index < len(lines) and lines[index]["type"] == LINE_DELETE:
                deletes.append(lines[index])
                index += 1
            while index < len(lines) and lines[index]["type"] == LINE_INSERT:
                inserts.append(lines[index])
                index += 1

            pairs = []
            for position in range(max(len(deletes), len(inserts))):
                old_line = deletes[position] if position < len(deletes) else None
                new_line = inserts[position] if position < len(inserts) else None
                pairs.append((old_line, new_line))
            yield "change", pairs

    def _highlight(
        self, old_line: Optional[Dict[str, Any]], new_line: Optional[Dict[str, Any]]
    ) -> Tuple[str, str]:
        old_text = old_line["content"][1:] if old_line is not None else ""
        new_text = new_line["content"][1:] if new_line is not None else ""
        if self.highlight and old_line is not None and new_line is not None:
            return highlight_pair(
                old_text,
                new_text,
                char_by_char=self.char_by_char,
                max_line_length=self.max_line_length,
            )
        return escape_html(old_text), escape_html(new_text)
