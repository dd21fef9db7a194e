"""Terminal text utilities: escape-aware word wrapping.

Widths are measured with :func:`pi.markdown.ansi.visible_length`, so styled
text wraps on what the reader sees rather than on raw string length.
"""

from __future__ import annotations

from pi.markdown.ansi import visible_length


# ---------------------------------------------------------------------------
# wrap_text
# ---------------------------------------------------------------------------


def wrap_text(text: str, width: int, indent: int = 0) -> str:
    """Greedily word-wrap *text* to *width* columns.

    Every output line is prefixed with *indent* spaces and may hold at most
    ``width - indent`` visible characters.  Runs of whitespace collapse to a
    single space.  A word longer than the budget is never split; it gets a
    line of its own and overflows.

    Wrapping is disabled (the input is returned as-is) when ``width <= 0`` or
    ``width <= indent``.
    """
    if width <= 0 or width <= indent:
        return text

    budget = width - indent
    indent_str = " " * indent
    lines: list[str] = []
    current = ""

    for word in text.split():
        # The +1 pays for the joining space.
        if visible_length(current) + visible_length(word) + 1 <= budget:
            current = f"{current} {word}" if current else word
        else:
            if current:
                lines.append(indent_str + current)
            current = word

    if current:
        lines.append(indent_str + current)

    return "\n".join(lines)
