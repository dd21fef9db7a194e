"""Markdown front end: builds a :mod:`pi.markdown.nodes` tree with markdown-it-py.

markdown-it-py emits a flat open/close token stream; we walk it through
``SyntaxTreeNode`` so nesting is explicit, then map each node type onto the
renderer's own node classes.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from pi.markdown.nodes import (
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
    TableCell,
    Text,
    TextBlock,
)

logger = logging.getLogger(__name__)

# CommonMark plus the two GFM extensions we render.  The "gfm-like" preset
# would also switch on linkify, which needs an extra package.  text_join is
# off so backslash escapes and entities stay separate text_special tokens.
_md_parser = MarkdownIt("commonmark").enable(["table", "strikethrough"]).disable("text_join")

_TASK_RE = re.compile(r"^\[([ xX])\](?:\s+|$)")


def parse(markdown: str) -> list[BlockNode]:
    """Parse *markdown* into a list of top-level block nodes."""
    root = SyntaxTreeNode(_md_parser.parse(markdown))
    return _convert_blocks(root.children)


# ---------------------------------------------------------------------------
# Block nodes
# ---------------------------------------------------------------------------


def _convert_blocks(nodes: list[SyntaxTreeNode]) -> list[BlockNode]:
    blocks: list[BlockNode] = []
    for node in nodes:
        block = _convert_block(node)
        if block is not None:
            blocks.append(block)
    return blocks


def _convert_block(node: SyntaxTreeNode) -> BlockNode | None:
    t = node.type

    if t == "heading":
        level = int(node.tag[1]) if node.tag.startswith("h") else 1
        return Heading(level=level, children=_inline_content(node))

    if t == "paragraph":
        # Tight lists hide their paragraphs; keep them as bare inline runs.
        if node.hidden:
            return TextBlock(children=_inline_content(node))
        return Paragraph(children=_inline_content(node))

    if t == "blockquote":
        return Blockquote(children=tuple(_convert_blocks(node.children)))

    if t in ("fence", "code_block"):
        code = node.content
        if code.endswith("\n"):
            code = code[:-1]
        lang = node.info.strip() if t == "fence" and node.info else ""
        return CodeBlock(text=code, lang=lang or None)

    if t in ("bullet_list", "ordered_list"):
        items = tuple(_convert_list_item(child) for child in node.children if child.type == "list_item")
        start = 1
        start_attr = node.attrs.get("start")
        if start_attr is not None:
            try:
                start = int(start_attr)
            except (TypeError, ValueError):
                start = 1
        return List(items=items, ordered=t == "ordered_list", start=start)

    if t == "hr":
        return HorizontalRule()

    if t == "table":
        return _convert_table(node)

    if t == "html_block":
        return RawHtml(text=node.content)

    logger.debug("Skipping unsupported block node %r", t)
    return None


def _convert_list_item(node: SyntaxTreeNode) -> ListItem:
    children = _convert_blocks(node.children)
    if children and isinstance(children[0], (Paragraph, TextBlock)):
        first = children[0]
        if first.children and isinstance(first.children[0], Text):
            match = _TASK_RE.match(first.children[0].text)
            if match:
                rest = first.children[0].text[match.end() :]
                inline = ((Text(rest),) if rest else ()) + first.children[1:]
                children[0] = replace(first, children=inline)
                return ListItem(children=tuple(children), task=True, checked=match.group(1) in "xX")
    return ListItem(children=tuple(children))


def _convert_table(node: SyntaxTreeNode) -> Table:
    header: tuple[TableCell, ...] = ()
    rows: list[tuple[TableCell, ...]] = []
    for section in node.children:
        for tr in section.children:
            cells = tuple(TableCell(children=_inline_content(cell)) for cell in tr.children)
            if section.type == "thead":
                header = cells
            else:
                rows.append(cells)
    return Table(header=header, rows=tuple(rows))


# ---------------------------------------------------------------------------
# Inline nodes
# ---------------------------------------------------------------------------


def _inline_content(node: SyntaxTreeNode) -> tuple[InlineNode, ...]:
    """Convert the ``inline`` child of a block node, if it has one."""
    for child in node.children:
        if child.type == "inline":
            return tuple(_convert_inlines(child.children))
    return ()


def _convert_inlines(nodes: list[SyntaxTreeNode]) -> list[InlineNode]:
    result: list[InlineNode] = []
    for node in nodes:
        inline = _convert_inline(node)
        if inline is not None:
            result.append(inline)
    return result


def _convert_inline(node: SyntaxTreeNode) -> InlineNode | None:
    t = node.type

    if t in ("text", "html_inline"):
        return Text(node.content)
    if t == "softbreak":
        return Text("\n")
    if t == "hardbreak":
        return LineBreak()
    if t == "text_special":
        return EscapedChar(node.content)
    if t == "code_inline":
        return CodeSpan(node.content)
    if t == "strong":
        return Strong(children=tuple(_convert_inlines(node.children)))
    if t == "em":
        return Emphasis(children=tuple(_convert_inlines(node.children)))
    if t == "s":
        return Strikethrough(children=tuple(_convert_inlines(node.children)))
    if t == "link":
        return Link(href=str(node.attrs.get("href", "")), children=tuple(_convert_inlines(node.children)))
    if t == "image":
        return Image(href=str(node.attrs.get("src", "")), alt=node.content)

    logger.debug("Unsupported inline node %r, keeping its text", t)
    if node.content:
        return Text(node.content)
    return None
