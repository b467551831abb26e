"""Tests for the bundled diff parser and HTML renderer."""

import json

from diffview.engine import to_json_model, to_pretty_html
from diffview.engine.highlight import escape_html, highlight_pair
from diffview.engine.parser import DiffParser


class TestDiffParser:
    """Test DiffParser."""

    def test_parse_modified_and_new_file(self, sample_diff):
        """Both files of the sample diff are parsed with their flags."""
        files = DiffParser().parse(sample_diff)

        assert len(files) == 2
        modified, added = files

        assert modified.oldName == "hello.py"
        assert modified.newName == "hello.py"
        assert modified.language == "py"
        assert modified.checksumBefore == "1111111"
        assert modified.checksumAfter == "2222222"
        assert modified.addedLines == 1
        assert modified.deletedLines == 1
        assert not modified.isNew

        assert added.isNew is True
        assert added.oldName == "/dev/null"
        assert added.newName == "docs/new.md"
        assert added.newMode == "100644"
        assert added.addedLines == 2
        assert added.language == "md"

    def test_line_numbers(self, sample_diff):
        """Context, delete and insert lines carry the right numbers."""
        block = DiffParser().parse(sample_diff)[0].blocks[0]

        assert block.header == "@@ -1,3 +1,3 @@"
        assert block.oldStartLine == 1
        assert block.newStartLine == 1
        assert [(line.type, line.oldNumber, line.newNumber) for line in block.lines] == [
            ("context", 1, 1),
            ("delete", 2, None),
            ("insert", None, 2),
            ("context", 3, 3),
        ]

    def test_deleted_lines_that_look_like_headers(self):
        """A removed line starting with '--' stays part of the hunk."""
        raw = (
            "--- a/sql.txt\n"
            "+++ b/sql.txt\n"
            "@@ -1,2 +1,2 @@\n"
            "--- comment\n"
            "+++ other\n"
            " keep\n"
        )
        files = DiffParser().parse(raw)

        assert len(files) == 1
        lines = files[0].blocks[0].lines
        assert [line.type for line in lines] == ["delete", "insert", "context"]
        assert lines[0].content == "--- comment"

    def test_plain_unified_diff_with_multiple_files(self):
        """Diffs without git headers split on ---/+++ pairs."""
        raw = (
            "--- a/one.txt\t2024-01-01\n"
            "+++ b/one.txt\t2024-01-02\n"
            "@@ -1 +1 @@\n"
            "-1\n"
            "+one\n"
            "--- a/two.txt\n"
            "+++ b/two.txt\n"
            "@@ -1 +1 @@\n"
            "-2\n"
            "+two\n"
        )
        files = DiffParser().parse(raw)

        assert [f.newName for f in files] == ["one.txt", "two.txt"]

    def test_rename_and_binary(self):
        """Extended git headers set rename and binary flags."""
        raw = (
            "diff --git a/old.txt b/new.txt\n"
            "similarity index 100%\n"
            "rename from old.txt\n"
            "rename to new.txt\n"
            "diff --git a/logo.png b/logo.png\n"
            "index 1234567..89abcde 100644\n"
            "Binary files a/logo.png and b/logo.png differ\n"
        )
        renamed, binary = DiffParser().parse(raw)

        assert renamed.isRename is True
        assert renamed.oldName == "old.txt"
        assert renamed.newName == "new.txt"
        assert renamed.blocks == []

        assert binary.isBinary is True
        assert binary.newName == "logo.png"

    def test_no_newline_marker_is_skipped(self):
        """The no-newline marker is not counted as a line."""
        raw = (
            "--- a/f\n"
            "+++ b/f\n"
            "@@ -1 +1 @@\n"
            "-a\n"
            "\\ No newline at end of file\n"
            "+b\n"
            "\\ No newline at end of file\n"
        )
        lines = DiffParser().parse(raw)[0].blocks[0].lines
        assert [line.content for line in lines] == ["-a", "+b"]

    def test_empty_input(self):
        """Empty input yields an empty model."""
        assert DiffParser().parse("") == []


class TestToJsonModel:
    """Test the JSON model contract."""

    def test_model_is_json_serializable(self, sample_diff):
        """The model round-trips through json without custom encoders."""
        model = to_json_model(sample_diff)
        assert json.loads(json.dumps(model)) == model
        assert set(model[0]) >= {"oldName", "newName", "blocks", "addedLines", "deletedLines"}


class TestHighlight:
    """Test inline highlighting."""

    def test_word_highlight(self):
        """Changed words are wrapped on each side."""
        old, new = highlight_pair("print('Hello')", "print('Hello, World!')")
        assert "<ins>" in new
        assert "<del>" not in new
        assert old.startswith("print(")

    def test_char_highlight(self):
        """Character mode marks single changed characters."""
        old, new = highlight_pair("cat", "car", char_by_char=True)
        assert old == "ca<del>t</del>"
        assert new == "ca<ins>r</ins>"

    def test_content_is_escaped(self):
        """Markup in diff content is escaped."""
        old, new = highlight_pair("<b>", "<i>")
        assert "<b>" not in old
        assert "&lt;" in old and "&lt;" in new

    def test_slash_escaping(self):
        """Both sides encode slashes in changed and unchanged runs."""
        old, new = highlight_pair("a/b", "a//c")
        for side in (old, new):
            text = side.replace("</ins>", "").replace("</del>", "")
            assert "/" not in text and "&#47;" in text
        assert escape_html("//x") == "&#47;&#47;x"

    def test_long_lines_are_not_highlighted(self):
        """Lines above the limit are only escaped."""
        old, new = highlight_pair("a" * 20, "b" * 20, max_line_length=10)
        assert old == "a" * 20
        assert new == "b" * 20


class TestToPrettyHtml:
    """Test HTML rendering."""

    def test_line_by_line(self, sample_diff):
        """Default layout is a single table per file."""
        html = to_pretty_html(sample_diff, {"outputFormat": "line-by-line"})

        assert "d2h-file-list-wrapper" in html
        assert "d2h-file-side-diff" not in html
        assert "hello.py" in html
        assert "ADDED" in html

    def test_side_by_side(self, sample_diff):
        """Side-by-side renders two tables per file."""
        html = to_pretty_html(sample_diff, {"outputFormat": "side-by-side"})
        assert html.count("d2h-file-side-diff") == 4

    def test_hidden_file_list(self, sample_diff):
        """showFiles=False drops the file list."""
        html = to_pretty_html(sample_diff, {"showFiles": False})
        assert "d2h-file-list-wrapper" not in html

    def test_accepts_json_model(self, sample_diff):
        """inputFormat=json renders an existing model."""
        model = to_json_model(sample_diff)
        from_model = to_pretty_html(model, {"inputFormat": "json"})
        from_text = to_pretty_html(sample_diff, {})
        assert from_model == from_text

    def test_word_highlight_toggle(self, sample_diff):
        """Inline highlights appear only when a granularity is requested."""
        highlighted = to_pretty_html(sample_diff, {"wordByWord": True})
        plain = to_pretty_html(sample_diff, {"wordByWord": False, "charByChar": False})

        assert "<ins>" in highlighted
        assert "<ins>" not in plain

    def test_diff_content_is_escaped(self):
        """Diff text cannot inject markup."""
        raw = "--- a/x.html\n+++ b/x.html\n@@ -1 +1 @@\n-<script>\n+<b>\n"
        html = to_pretty_html(raw, {})
        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_line_by_line_groups_deletes_before_inserts(self):
        """A change run shows all removed lines before the added ones."""
        raw = "--- a/f\n+++ b/f\n@@ -1,2 +1,2 @@\n-one\n-two\n+uno\n+dos\n"
        html = to_pretty_html(raw, {"wordByWord": False})
        positions = [html.index(text) for text in ("one", "two", "uno", "dos")]
        assert positions == sorted(positions)

    def test_slashes_are_encoded(self):
        """Comment-style markers in diff text are not emitted verbatim."""
        raw = "--- a/x.js\n+++ b/x.js\n@@ -1 +1 @@\n-a\n+//diff2html-fileListCloseable\n"
        html = to_pretty_html(raw, {"wordByWord": False})

        assert "//diff2html-fileListCloseable" not in html
        assert "&#47;&#47;diff2html-fileListCloseable" in html
