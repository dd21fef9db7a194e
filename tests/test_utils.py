"""Tests for pi.markdown.utils -- word wrapping."""

from __future__ import annotations

from pi.markdown.ansi import bold, visible_length
from pi.markdown.utils import wrap_text

_LOREM = "the quick brown fox jumps over the lazy dog and keeps on running far away"


class TestWrapDisabled:
    def test_zero_width_returns_input(self) -> None:
        assert wrap_text("a  b\nc", 0) == "a  b\nc"

    def test_negative_width_returns_input(self) -> None:
        assert wrap_text("a b", -5) == "a b"

    def test_width_not_greater_than_indent_returns_input(self) -> None:
        assert wrap_text("a b", 4, indent=4) == "a b"
        assert wrap_text("a b", 3, indent=4) == "a b"


class TestWrap:
    """Greedy wrapping on visible length."""

    def test_short_text_is_one_line(self) -> None:
        assert wrap_text("hello world", 40) == "hello world"

    def test_breaks_between_words(self) -> None:
        assert wrap_text("aaa bbb ccc", 8) == "aaa bbb\nccc"

    def test_lines_fit_budget(self) -> None:
        for width in (10, 20, 30):
            for line in wrap_text(_LOREM, width).split("\n"):
                assert visible_length(line) <= width

    def test_words_preserved_in_order(self) -> None:
        assert wrap_text(_LOREM, 12).split() == _LOREM.split()

    def test_overlong_word_gets_own_line(self) -> None:
        assert wrap_text("a supercalifragilistic b", 10) == "a\nsupercalifragilistic\nb"

    def test_whitespace_collapses(self) -> None:
        assert wrap_text("a   b\n\tc", 40) == "a b c"

    def test_empty_input(self) -> None:
        assert wrap_text("", 10) == ""

    def test_indent_prefixes_every_line(self) -> None:
        result = wrap_text("aaa bbb ccc", 10, indent=2)
        assert result == "  aaa bbb\n  ccc"
        for line in result.split("\n"):
            assert line.startswith("  ")
            assert visible_length(line) <= 10

    def test_styled_words_measured_by_visible_length(self) -> None:
        text = " ".join(bold(w) for w in ("aaa", "bbb", "ccc"))
        lines = wrap_text(text, 8).split("\n")
        assert len(lines) == 2
        assert all(visible_length(line) <= 8 for line in lines)
