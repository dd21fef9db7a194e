"""ANSI escape sequences for terminal styling.

Builds SGR (Select Graphic Rendition) sequences, wraps text in them, and
measures / strips them again so callers can reason about visible length.
"""

from __future__ import annotations

import re
from enum import IntEnum

CSI = "\x1b["


class SGR(IntEnum):
    """SGR attribute and basic colour codes."""

    RESET = 0

    # Text styles
    BOLD = 1
    DIM = 2
    ITALIC = 3
    UNDERLINE = 4
    BLINK = 5
    INVERSE = 7
    HIDDEN = 8
    STRIKETHROUGH = 9

    # Reset individual styles (22 clears both bold and dim)
    RESET_BOLD_DIM = 22
    RESET_ITALIC = 23
    RESET_UNDERLINE = 24
    RESET_BLINK = 25
    RESET_INVERSE = 27
    RESET_HIDDEN = 28
    RESET_STRIKETHROUGH = 29

    # Foreground colours
    FG_BLACK = 30
    FG_RED = 31
    FG_GREEN = 32
    FG_YELLOW = 33
    FG_BLUE = 34
    FG_MAGENTA = 35
    FG_CYAN = 36
    FG_WHITE = 37
    FG_DEFAULT = 39

    # Background colours
    BG_BLACK = 40
    BG_RED = 41
    BG_GREEN = 42
    BG_YELLOW = 43
    BG_BLUE = 44
    BG_MAGENTA = 45
    BG_CYAN = 46
    BG_WHITE = 47
    BG_DEFAULT = 49

    # Bright foreground colours
    FG_BRIGHT_BLACK = 90
    FG_BRIGHT_RED = 91
    FG_BRIGHT_GREEN = 92
    FG_BRIGHT_YELLOW = 93
    FG_BRIGHT_BLUE = 94
    FG_BRIGHT_MAGENTA = 95
    FG_BRIGHT_CYAN = 96
    FG_BRIGHT_WHITE = 97

    # Bright background colours
    BG_BRIGHT_BLACK = 100
    BG_BRIGHT_RED = 101
    BG_BRIGHT_GREEN = 102
    BG_BRIGHT_YELLOW = 103
    BG_BRIGHT_BLUE = 104
    BG_BRIGHT_MAGENTA = 105
    BG_BRIGHT_CYAN = 106
    BG_BRIGHT_WHITE = 107


# CSI SGR sequences only: ESC[ <digits/semicolons> m
_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


# ---------------------------------------------------------------------------
# Sequence construction
# ---------------------------------------------------------------------------


def sgr(*codes: int) -> str:
    """Return one combined SGR sequence for *codes*.

    ``sgr()`` yields ``ESC[m``, which terminals treat as a reset.
    """
    return f"{CSI}{';'.join(str(int(c)) for c in codes)}m"


RESET = sgr(SGR.RESET)


def style(text: str, *codes: int) -> str:
    """Wrap *text* in the combined sequence for *codes* followed by a reset.

    With no codes the text is returned untouched -- "no style" is not the
    same thing as an explicit reset.
    """
    if not codes:
        return text
    return sgr(*codes) + text + RESET


def bold(text: str) -> str:
    return style(text, SGR.BOLD)


def dim(text: str) -> str:
    return style(text, SGR.DIM)


def italic(text: str) -> str:
    return style(text, SGR.ITALIC)


def underline(text: str) -> str:
    return style(text, SGR.UNDERLINE)


def strikethrough(text: str) -> str:
    return style(text, SGR.STRIKETHROUGH)


def inverse(text: str) -> str:
    return style(text, SGR.INVERSE)


def fg(text: str, color: int) -> str:
    """Colour *text* with a basic foreground code (30-37, 90-97)."""
    return style(text, color)


def bg(text: str, color: int) -> str:
    """Colour *text* with a basic background code (40-47, 100-107)."""
    return style(text, color)


# ---------------------------------------------------------------------------
# Extended colours
#
# These always close with RESET.  Combining one with boolean attributes means
# wrapping the already-reset result again, so the output carries two resets.
# ---------------------------------------------------------------------------


def fg256(text: str, color: int) -> str:
    return f"{CSI}38;5;{color}m{text}{RESET}"


def bg256(text: str, color: int) -> str:
    return f"{CSI}48;5;{color}m{text}{RESET}"


def fg_rgb(text: str, r: int, g: int, b: int) -> str:
    return f"{CSI}38;2;{r};{g};{b}m{text}{RESET}"


def bg_rgb(text: str, r: int, g: int, b: int) -> str:
    return f"{CSI}48;2;{r};{g};{b}m{text}{RESET}"


# ---------------------------------------------------------------------------
# Measurement
# ---------------------------------------------------------------------------


def strip_ansi(text: str) -> str:
    """Remove every SGR escape sequence from *text*."""
    return _ANSI_RE.sub("", text)


def visible_length(text: str) -> int:
    """Length of *text* once escape sequences are removed.

    Counts code points, not terminal cells.
    """
    return len(strip_ansi(text))


def pad_end(text: str, width: int) -> str:
    """Right-pad *text* with spaces up to *width* visible characters."""
    missing = width - visible_length(text)
    if missing <= 0:
        return text
    return text + " " * missing
