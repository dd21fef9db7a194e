"""Tests for the pi-markdown command line."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from pi.markdown.cli import main


def _run(*args: str, input: str | None = None, env: dict[str, str] | None = None):
    return CliRunner().invoke(main, list(args), input=input, env=env)


class TestCli:
    def test_reads_stdin(self) -> None:
        result = _run("--strip", input="# Hello\n")
        assert result.exit_code == 0
        assert result.output == "# Hello\n"

    def test_reads_file(self, tmp_path: Path) -> None:
        source = tmp_path / "doc.md"
        source.write_text("- a\n- b\n", encoding="utf-8")
        result = _run(str(source), "--theme", "no-color")
        assert result.exit_code == 0
        assert result.output == "- a\n- b\n"

    def test_colored_by_default(self) -> None:
        result = _run(input="**x**")
        assert "\x1b[" in result.output

    def test_no_color_theme(self) -> None:
        result = _run("--theme", "no-color", input="# T\n\n**x** `y`")
        assert result.exit_code == 0
        assert "\x1b" not in result.output

    def test_theme_from_env(self) -> None:
        result = _run(input="- a", env={"PI_MARKDOWN_THEME": "ascii"})
        assert "*" in result.output
        assert "•" not in result.output

    def test_width(self) -> None:
        result = _run("--theme", "plain", "--width", "10", input="aaa bbb ccc ddd")
        assert result.output == "aaa bbb\nccc ddd\n"

    def test_show_urls(self) -> None:
        result = _run("--theme", "plain", "--show-urls", input="[a](http://b)")
        assert result.output == "a (http://b)\n"

    def test_theme_file(self, tmp_path: Path) -> None:
        theme = tmp_path / "theme.json"
        theme.write_text(json.dumps({"base": "no-color", "bullet": "+"}), encoding="utf-8")
        result = _run("--theme-file", str(theme), input="- a")
        assert result.exit_code == 0
        assert result.output == "+ a\n"

    def test_bad_theme_file_exits_1(self, tmp_path: Path) -> None:
        theme = tmp_path / "theme.json"
        theme.write_text("{oops", encoding="utf-8")
        result = _run("--theme-file", str(theme), input="x")
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_missing_source_exits_1(self, tmp_path: Path) -> None:
        result = _run(str(tmp_path / "nope.md"))
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_unknown_theme_name_rejected(self) -> None:
        result = _run("--theme", "sepia", input="x")
        assert result.exit_code == 2
