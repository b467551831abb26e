"""Integration tests for diffview against a real git repository."""

import json
import subprocess
import sys

import pytest

from diffview.main import main


class TestIntegration:
    """End-to-end runs of the CLI pipeline."""

    @pytest.mark.integration
    def test_working_tree_diff_as_json(self, git_helper, monkeypatch, capsys):
        """The default git command feeds the JSON model."""
        git_helper.create_file("src/app.py", "value = 1\nname = 'x'\n")
        git_helper.create_file("dist/bundle.js", "var a = 1;\n")
        git_helper.add_and_commit("Initial commit")
        git_helper.modify_file("src/app.py", "value = 2\nname = 'x'\n")
        git_helper.modify_file("dist/bundle.js", "var a = 2;\n")

        monkeypatch.chdir(git_helper.repo_path)
        exit_code = main(["-f", "json", "-o", "stdout", "--ig", "dist"])

        assert exit_code == 0
        model = json.loads(capsys.readouterr().out)
        assert [entry["newName"] for entry in model] == ["src/app.py"]
        assert model[0]["addedLines"] == 1
        assert model[0]["deletedLines"] == 1

    @pytest.mark.integration
    def test_commit_range_to_html_file(self, git_helper, monkeypatch, temp_dir):
        """Git arguments after -- select the commits to compare."""
        git_helper.create_file("notes.txt", "first\n")
        git_helper.add_and_commit("First")
        git_helper.modify_file("notes.txt", "first\nsecond\n")
        git_helper.add_and_commit("Second")
        out_path = temp_dir / "report.html"

        monkeypatch.chdir(git_helper.repo_path)
        exit_code = main(["-s", "side", "-F", str(out_path), "--", "HEAD~1", "HEAD"])

        assert exit_code == 0
        document = out_path.read_text(encoding="utf-8")
        assert document.lstrip().lower().startswith("<!doctype html>")
        assert "notes.txt" in document
        assert "second" in document

    @pytest.mark.integration
    def test_clean_tree_reports_empty_input(self, git_helper, monkeypatch, capsys):
        """No changes means no output and a non-zero exit."""
        git_helper.create_file("a.txt", "a\n")
        git_helper.add_and_commit("Only commit")

        monkeypatch.chdir(git_helper.repo_path)
        exit_code = main(["-o", "stdout"])

        assert exit_code == 1
        assert "The input is empty" in capsys.readouterr().err

    @pytest.mark.integration
    @pytest.mark.slow
    def test_module_entry_point(self, sample_diff):
        """The CLI runs as a module and reads from stdin."""
        result = subprocess.run(
            [sys.executable, "-m", "diffview.main", "-i", "stdin", "-f", "json", "-o", "stdout"],
            input=sample_diff,
            capture_output=True,
            text=True,
            check=False,
        )

        assert result.returncode == 0, result.stderr
        assert json.loads(result.stdout)[1]["isNew"] is True
