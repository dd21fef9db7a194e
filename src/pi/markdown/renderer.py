"""Markdown renderer -- turns a document tree into styled terminal text.

Block nodes are rendered recursively into strings, each optionally wrapped
in blank-line margins taken from the theme.  A single mutable
:class:`RenderContext` is threaded through the recursion; constructs that
nest (blockquotes, lists) modify it on entry and restore it on exit.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from typing import Any, Iterable

from pi.markdown import ansi
from pi.markdown.nodes import (
    BlankSpace,
    BlockNode,
    Blockquote,
    CodeBlock,
    CodeSpan,
    Emphasis,
    EscapedChar,
    Heading,
    HorizontalRule,
    Image,
    InlineNode,
    LineBreak,
    Link,
    List,
    ListItem,
    Paragraph,
    RawHtml,
    Strikethrough,
    Strong,
    Table,
    Text,
    TextBlock,
)
from pi.markdown.parser import parse
from pi.markdown.styles import DARK_THEME, ElementStyle, Theme, apply_style, resolve_style
from pi.markdown.table import render_table
from pi.markdown.utils import wrap_text

logger = logging.getLogger(__name__)

_BLANK_RUN_RE = re.compile(r"\n{3,}")
_HTML_TAG_RE = re.compile(r"<[^>]*>")

_DEFAULT_BULLET = "•"
_DEFAULT_CHECKED = "✓"
_DEFAULT_UNCHECKED = "○"
_DEFAULT_HR_CHAR = "─"
_DEFAULT_BLOCKQUOTE_PREFIX = "│ "
_DEFAULT_LIST_INDENT = 2
_FALLBACK_RULE_WIDTH = 40


# ---------------------------------------------------------------------------
# Options / context
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RenderOptions:
    """Caller-facing render configuration."""

    theme: Theme = DARK_THEME
    width: int = 0  # 0 disables wrapping
    show_urls: bool = False
    soft_wrap: bool = True  # reserved; only paragraph wrapping uses width today


@dataclass
class RenderContext:
    """Per-call render state, mutated in place as the tree is walked."""

    theme: Theme
    width: int = 0
    show_urls: bool = False
    soft_wrap: bool = True
    indent: int = 0
    list_depth: int = 0
    list_item_index: list[int] = field(default_factory=list)
    in_blockquote: bool = False

    @classmethod
    def from_options(cls, options: RenderOptions) -> RenderContext:
        return cls(
            theme=options.theme,
            width=options.width,
            show_urls=options.show_urls,
            soft_wrap=options.soft_wrap,
        )


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def render_document(nodes: Iterable[BlockNode], options: RenderOptions | None = None) -> str:
    """Render an already-parsed document tree to a single string."""
    ctx = RenderContext.from_options(options or RenderOptions())
    rendered = "\n".join(render_block(node, ctx) for node in nodes)
    return _collapse_blank_lines(rendered).strip()


def render(markdown: str, options: RenderOptions | None = None, **overrides: Any) -> str:
    """Parse and render *markdown*.

    Keyword arguments override the matching :class:`RenderOptions` fields.
    """
    opts = options or RenderOptions()
    if overrides:
        opts = replace(opts, **overrides)
    return render_document(parse(markdown), opts)


def render_with_theme(markdown: str, theme: Theme, options: RenderOptions | None = None, **overrides: Any) -> str:
    return render(markdown, options, theme=theme, **overrides)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _collapse_blank_lines(text: str) -> str:
    return _BLANK_RUN_RE.sub("\n\n", text)


def _add_margin(text: str, style: ElementStyle | None) -> str:
    margin = style.margin if style is not None else None
    if not margin or margin <= 0:
        return text
    pad = "\n" * margin
    return pad + text + pad


# ---------------------------------------------------------------------------
# Block dispatch
# ---------------------------------------------------------------------------


def render_block(node: Any, ctx: RenderContext) -> str:
    """Render one block node.  Unknown node kinds never raise."""
    theme = ctx.theme

    match node:
        case Heading(level=level, children=children):
            style = resolve_style(theme, f"h{level}")
            return _add_margin(apply_style(render_inline(children, ctx), style), style)

        case Paragraph(children=children):
            text = render_inline(children, ctx)
            if ctx.width > 0:
                text = wrap_text(text, ctx.width, ctx.indent)
            style = resolve_style(theme, "paragraph")
            return _add_margin(apply_style(text, style), style)

        case TextBlock(children=children):
            return render_inline(children, ctx)

        case Blockquote():
            return _render_blockquote(node, ctx)

        case CodeBlock():
            return _render_code_block(node, ctx)

        case List():
            return _render_list(node, ctx)

        case ListItem():
            return _render_list_item(node, False, ctx)

        case HorizontalRule():
            style = resolve_style(theme, "horizontal_rule")
            width = ctx.width if ctx.width > 0 else _FALLBACK_RULE_WIDTH
            line = (theme.hr_char or _DEFAULT_HR_CHAR) * width
            return _add_margin(apply_style(line, style), style)

        case Table():
            return _render_table(node, ctx)

        case RawHtml(text=text):
            return _HTML_TAG_RE.sub("", text)

        case BlankSpace():
            return ""

        case _:
            children = getattr(node, "children", None)
            if isinstance(children, (list, tuple)):
                logger.debug("Rendering children of unknown block %s", type(node).__name__)
                return "\n".join(render_block(child, ctx) for child in children)
            logger.debug("Dropping unknown block %s", type(node).__name__)
            return ""


def _render_blockquote(node: Blockquote, ctx: RenderContext) -> str:
    style = resolve_style(ctx.theme, "blockquote")
    indent = style.indent or 0 if style is not None else 0
    prefix = style.prefix if style is not None and style.prefix is not None else _DEFAULT_BLOCKQUOTE_PREFIX

    prev_in_blockquote = ctx.in_blockquote
    ctx.in_blockquote = True
    ctx.indent += indent
    try:
        content = "\n".join(render_block(child, ctx) for child in node.children)
    finally:
        ctx.in_blockquote = prev_in_blockquote
        ctx.indent -= indent

    # Child margins would otherwise turn into prefixed "blank" lines.
    content = _collapse_blank_lines(content).strip("\n")
    quoted = "\n".join(prefix + line for line in content.split("\n"))

    # The prefix is already on every line; the style only adds colour.
    body_style = replace(style, prefix=None) if style is not None else None
    return _add_margin(apply_style(quoted, body_style), style)


def _render_code_block(node: CodeBlock, ctx: RenderContext) -> str:
    style = resolve_style(ctx.theme, "code_block")
    pad = " " * (style.padding or 0 if style is not None else 0)

    content = "\n".join(pad + line + pad for line in node.text.split("\n"))
    if node.lang:
        label = apply_style(node.lang, resolve_style(ctx.theme, "code_language"))
        content = label + "\n" + content

    return _add_margin(apply_style(content, style), style)


def _render_list(node: List, ctx: RenderContext) -> str:
    ctx.list_depth += 1
    ctx.list_item_index.append(0)
    try:
        items: list[str] = []
        for idx, item in enumerate(node.items):
            ctx.list_item_index[ctx.list_depth - 1] = idx + 1
            items.append(_render_list_item(item, node.ordered, ctx))
    finally:
        ctx.list_item_index.pop()
        ctx.list_depth -= 1

    return _add_margin("\n".join(items), resolve_style(ctx.theme, "list"))


def _render_list_item(item: ListItem, ordered: bool, ctx: RenderContext) -> str:
    theme = ctx.theme
    item_style = resolve_style(theme, "list_item")
    step = item_style.indent if item_style is not None and item_style.indent is not None else _DEFAULT_LIST_INDENT
    indent = " " * (max(ctx.list_depth - 1, 0) * step)

    if item.task:
        checked = theme.checkbox.checked if theme.checkbox else _DEFAULT_CHECKED
        unchecked = theme.checkbox.unchecked if theme.checkbox else _DEFAULT_UNCHECKED
        marker = (checked if item.checked else unchecked) + " "
    elif ordered:
        number = ctx.list_item_index[ctx.list_depth - 1] if ctx.list_depth > 0 else 1
        marker = f"{number}. "
    else:
        bullet = theme.bullet or _DEFAULT_BULLET
        if theme.bullet_color:
            bullet = ansi.style(bullet, theme.bullet_color)
        marker = bullet + " "

    # Prose sits beside the marker (first run) or under it (later runs),
    # whether or not the list is loose.
    hang = " " * (len(indent) + ansi.visible_length(marker))
    parts: list[str] = []
    for i, child in enumerate(item.children):
        if isinstance(child, (Paragraph, TextBlock)):
            text = _item_prose(child, hang, ctx)
            parts.append(text if i == 0 else "\n" + hang + text)
        else:
            parts.append(render_block(child, ctx))
    return indent + marker + "".join(parts)


def _item_prose(node: Paragraph | TextBlock, hang: str, ctx: RenderContext) -> str:
    text = render_inline(node.children, ctx)
    if ctx.width > 0:
        text = wrap_text(text, ctx.width - len(hang)).replace("\n", "\n" + hang)
    return text


def _render_table(node: Table, ctx: RenderContext) -> str:
    theme = ctx.theme
    header = [render_inline(cell.children, ctx) for cell in node.header]
    rows = [[render_inline(cell.children, ctx) for cell in row] for row in node.rows]

    table_style = resolve_style(theme, "table")
    text = render_table(
        header,
        rows,
        header_style=resolve_style(theme, "table_header"),
        cell_style=resolve_style(theme, "table_cell"),
        chars=theme.table_chars,
        border_color=table_style.border_color if table_style is not None else None,
    )
    return _add_margin(text, table_style)


# ---------------------------------------------------------------------------
# Inline dispatch
# ---------------------------------------------------------------------------


def render_inline(nodes: Iterable[InlineNode], ctx: RenderContext) -> str:
    """Render a run of inline nodes, concatenated without separators."""
    theme = ctx.theme
    parts: list[str] = []

    for node in nodes:
        match node:
            case Text(text=text):
                parts.append(text)
            case Strong(children=children):
                parts.append(apply_style(render_inline(children, ctx), resolve_style(theme, "strong")))
            case Emphasis(children=children):
                parts.append(apply_style(render_inline(children, ctx), resolve_style(theme, "emphasis")))
            case CodeSpan(text=text):
                parts.append(apply_style(text, resolve_style(theme, "code")))
            case Strikethrough(children=children):
                parts.append(apply_style(render_inline(children, ctx), resolve_style(theme, "strikethrough")))
            case Link(href=href, children=children):
                text = render_inline(children, ctx)
                if ctx.show_urls and href:
                    text += f" ({href})"
                parts.append(apply_style(text, resolve_style(theme, "link")))
            case Image(href=href, alt=alt):
                parts.append(apply_style(alt or href, resolve_style(theme, "image")))
            case LineBreak():
                parts.append("\n")
            case EscapedChar(text=text):
                parts.append(text)
            case _:
                text = getattr(node, "text", None)
                if isinstance(text, str):
                    parts.append(text)
                else:
                    logger.debug("Dropping unknown inline %s", type(node).__name__)

    return "".join(parts)
