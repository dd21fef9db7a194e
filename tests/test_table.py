"""Tests for pi.markdown.table -- bordered table layout."""

from __future__ import annotations

import logging

import pytest

from pi.markdown.ansi import SGR, bold, strip_ansi, visible_length
from pi.markdown.styles import ASCII_TABLE_CHARS, ElementStyle, Indexed
from pi.markdown.table import column_widths, render_table


class TestColumnWidths:
    def test_widest_cell_wins(self) -> None:
        assert column_widths(["A", "BB"], [["ccc", "d"], ["e", "f"]]) == [3, 2]

    def test_escape_codes_ignored(self) -> None:
        assert column_widths([bold("ab")], [["c"]]) == [2]


class TestRenderTable:
    """Box layout with header separator."""

    def test_two_by_one(self) -> None:
        result = render_table(["A", "B"], [["1", "2"]])
        assert result.split("\n") == [
            "┌───┬───┐",
            "│ A │ B │",
            "├───┼───┤",
            "│ 1 │ 2 │",
            "└───┴───┘",
        ]

    def test_cells_padded_to_column_width(self) -> None:
        lines = render_table(["Name", "N"], [["x", "100"]]).split("\n")
        assert lines[1] == "│ Name │ N   │"
        assert lines[3] == "│ x    │ 100 │"

    def test_all_lines_same_visible_width(self) -> None:
        lines = render_table(["A", bold("Long header")], [["wide cell", "b"], ["c", ""]]).split("\n")
        assert len({visible_length(line) for line in lines}) == 1

    def test_styles_applied_to_cells(self) -> None:
        result = render_table(["A"], [["1"]], header_style=ElementStyle(bold=True))
        assert "\x1b[1mA\x1b[0m" in result
        assert strip_ansi(result).split("\n")[3] == "│ 1 │"

    def test_empty_header_renders_nothing(self) -> None:
        assert render_table([], []) == ""

    def test_no_rows(self) -> None:
        lines = render_table(["A"], []).split("\n")
        assert lines == ["┌───┐", "│ A │", "├───┤", "└───┘"]

    def test_ascii_chars(self) -> None:
        result = render_table(["A", "B"], [["1", "2"]], chars=ASCII_TABLE_CHARS)
        assert result.split("\n") == [
            "+---+---+",
            "| A | B |",
            "+---+---+",
            "| 1 | 2 |",
            "+---+---+",
        ]

    def test_border_color(self) -> None:
        result = render_table(["A"], [["1"]], border_color=Indexed(SGR.FG_BRIGHT_BLACK))
        assert "\x1b[90m┌───┐\x1b[0m" in result
        assert "\x1b[90m│\x1b[0m" in result


class TestColumnMismatch:
    """Rows are normalized to the header's column count."""

    def test_short_row_padded(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="pi.markdown.table"):
            lines = render_table(["A", "B"], [["1"]]).split("\n")
        assert lines[3] == "│ 1 │   │"
        assert "padding" in caplog.text

    def test_long_row_truncated(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="pi.markdown.table"):
            lines = render_table(["A"], [["1", "extra"]]).split("\n")
        assert lines[3] == "│ 1 │"
        assert "truncating" in caplog.text
