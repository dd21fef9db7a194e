"""Fixed-width table layout with box-drawing borders.

Cells arrive already rendered (and possibly styled); column widths are
measured on visible length so escape codes never widen a column.
"""

from __future__ import annotations

import logging
from typing import Sequence

from pi.markdown.ansi import pad_end, visible_length
from pi.markdown.styles import BOX_TABLE_CHARS, Color, ElementStyle, TableChars, apply_style, color_text

logger = logging.getLogger(__name__)


def column_widths(header: Sequence[str], rows: Sequence[Sequence[str]]) -> list[int]:
    """Return the widest visible cell per column, header included."""
    widths = [visible_length(cell) for cell in header]
    for row in rows:
        for i, cell in enumerate(row[: len(widths)]):
            widths[i] = max(widths[i], visible_length(cell))
    return widths


def _normalize_rows(rows: Sequence[Sequence[str]], num_cols: int) -> list[list[str]]:
    """Pad short rows with empty cells and drop cells past the header width."""
    normalized: list[list[str]] = []
    for index, row in enumerate(rows):
        cells = list(row)
        if len(cells) != num_cols:
            logger.warning(
                "Table row %d has %d cells, header has %d; %s",
                index,
                len(cells),
                num_cols,
                "padding" if len(cells) < num_cols else "truncating",
            )
            cells = cells[:num_cols] + [""] * (num_cols - len(cells))
        normalized.append(cells)
    return normalized


# ---------------------------------------------------------------------------
# Borders
# ---------------------------------------------------------------------------


def _border(widths: list[int], left: str, mid: str, right: str, chars: TableChars, color: Color | None) -> str:
    line = left + mid.join(chars.horizontal * (w + 2) for w in widths) + right
    return color_text(line, color)


def _row(
    cells: list[str],
    widths: list[int],
    style: ElementStyle | None,
    chars: TableChars,
    color: Color | None,
) -> str:
    vertical = color_text(chars.vertical, color)
    padded = [apply_style(pad_end(cell, width), style) for cell, width in zip(cells, widths)]
    return f"{vertical} " + f" {vertical} ".join(padded) + f" {vertical}"


# ---------------------------------------------------------------------------
# render_table
# ---------------------------------------------------------------------------


def render_table(
    header: Sequence[str],
    rows: Sequence[Sequence[str]],
    *,
    header_style: ElementStyle | None = None,
    cell_style: ElementStyle | None = None,
    chars: TableChars = BOX_TABLE_CHARS,
    border_color: Color | None = None,
) -> str:
    """Lay out a table as a newline-joined block of text.

    Produces a top border, the header row, a header/body separator, one line
    per body row and a bottom border.  Each cell is right-padded to its
    column width and gets one space of padding on either side.
    """
    num_cols = len(header)
    if num_cols == 0:
        return ""

    body = _normalize_rows(rows, num_cols)
    widths = column_widths(header, body)

    lines = [
        _border(widths, chars.top_left, chars.top_mid, chars.top_right, chars, border_color),
        _row(list(header), widths, header_style, chars, border_color),
        _border(widths, chars.mid_left, chars.mid_mid, chars.mid_right, chars, border_color),
    ]
    lines.extend(_row(row, widths, cell_style, chars, border_color) for row in body)
    lines.append(_border(widths, chars.bottom_left, chars.bottom_mid, chars.bottom_right, chars, border_color))
    return "\n".join(lines)
