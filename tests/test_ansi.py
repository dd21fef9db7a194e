"""Tests for pi.markdown.ansi -- escape sequence construction and measurement."""

from __future__ import annotations

from pi.markdown.ansi import (
    RESET,
    SGR,
    bg256,
    bg_rgb,
    bold,
    fg,
    fg256,
    fg_rgb,
    pad_end,
    sgr,
    strip_ansi,
    style,
    visible_length,
)


# ---------------------------------------------------------------------------
# sgr / style
# ---------------------------------------------------------------------------


class TestSgr:
    """Build combined SGR sequences."""

    def test_single_code(self) -> None:
        assert sgr(SGR.BOLD) == "\x1b[1m"

    def test_multiple_codes_joined_with_semicolons(self) -> None:
        assert sgr(SGR.BOLD, SGR.FG_RED) == "\x1b[1;31m"

    def test_no_codes_is_bare_reset(self) -> None:
        assert sgr() == "\x1b[m"

    def test_reset_constant(self) -> None:
        assert RESET == "\x1b[0m"


class TestStyle:
    """Wrap text in a sequence plus reset."""

    def test_no_codes_returns_text_unchanged(self) -> None:
        assert style("hello") == "hello"

    def test_wraps_with_codes_and_reset(self) -> None:
        assert style("hi", SGR.BOLD, SGR.ITALIC) == "\x1b[1;3mhi\x1b[0m"

    def test_bold_helper(self) -> None:
        assert bold("x") == "\x1b[1mx\x1b[0m"

    def test_fg_helper(self) -> None:
        assert fg("x", SGR.FG_BRIGHT_CYAN) == "\x1b[96mx\x1b[0m"


# ---------------------------------------------------------------------------
# Extended colours
# ---------------------------------------------------------------------------


class TestExtendedColors:
    """256-colour and true-colour helpers use fixed-form sequences."""

    def test_fg256(self) -> None:
        assert fg256("x", 208) == "\x1b[38;5;208mx\x1b[0m"

    def test_bg256(self) -> None:
        assert bg256("x", 17) == "\x1b[48;5;17mx\x1b[0m"

    def test_fg_rgb(self) -> None:
        assert fg_rgb("x", 255, 128, 0) == "\x1b[38;2;255;128;0mx\x1b[0m"

    def test_bg_rgb(self) -> None:
        assert bg_rgb("x", 1, 2, 3) == "\x1b[48;2;1;2;3mx\x1b[0m"

    def test_rgb_combined_with_attributes_has_two_resets(self) -> None:
        combined = style(fg_rgb("x", 1, 2, 3), SGR.BOLD)
        assert combined.count(RESET) == 2
        assert strip_ansi(combined) == "x"


# ---------------------------------------------------------------------------
# strip_ansi / visible_length / pad_end
# ---------------------------------------------------------------------------


class TestStripAnsi:
    """Remove escape sequences."""

    def test_plain_text_unchanged(self) -> None:
        assert strip_ansi("hello") == "hello"

    def test_removes_codes(self) -> None:
        assert strip_ansi("\x1b[1;31mred\x1b[0m text") == "red text"

    def test_removes_bare_reset(self) -> None:
        assert strip_ansi(sgr() + "a") == "a"

    def test_idempotent(self) -> None:
        samples = [
            "",
            "plain",
            style("a", SGR.BOLD) + fg_rgb("b", 1, 2, 3),
            "\x1b[38;5;208mx\x1b[0m\x1b[m",
        ]
        for s in samples:
            assert strip_ansi(strip_ansi(s)) == strip_ansi(s)


class TestVisibleLength:
    """Measure length without escape sequences."""

    def test_plain(self) -> None:
        assert visible_length("hello") == 5

    def test_empty(self) -> None:
        assert visible_length("") == 0

    def test_codes_do_not_count(self) -> None:
        assert visible_length("\x1b[1mhi\x1b[0m") == 2

    def test_equals_length_of_stripped(self) -> None:
        s = style("abc", SGR.UNDERLINE) + " " + bg256("de", 4)
        assert visible_length(s) == len(strip_ansi(s))

    def test_styling_never_changes_visible_length(self) -> None:
        for codes in [(), (SGR.BOLD,), (SGR.DIM, SGR.FG_RED, SGR.BG_BLUE)]:
            assert visible_length(style("some text", *codes)) == len("some text")


class TestPadEnd:
    """Right-pad by visible length."""

    def test_pads_plain_text(self) -> None:
        assert pad_end("ab", 4) == "ab  "

    def test_pads_styled_text_by_visible_length(self) -> None:
        styled = bold("ab")
        padded = pad_end(styled, 4)
        assert padded == styled + "  "
        assert visible_length(padded) == 4

    def test_never_truncates(self) -> None:
        assert pad_end("abcdef", 3) == "abcdef"
