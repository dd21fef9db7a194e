"""Document tree consumed by the renderer.

A closed set of immutable block and inline node types.  Trees are usually
produced by :func:`pi.markdown.parser.parse` but can be built by hand.
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Inline nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Strong:
    children: tuple[InlineNode, ...] = ()


@dataclass(frozen=True)
class Emphasis:
    children: tuple[InlineNode, ...] = ()


@dataclass(frozen=True)
class CodeSpan:
    text: str


@dataclass(frozen=True)
class Strikethrough:
    children: tuple[InlineNode, ...] = ()


@dataclass(frozen=True)
class Link:
    href: str
    children: tuple[InlineNode, ...] = ()


@dataclass(frozen=True)
class Image:
    href: str
    alt: str = ""


@dataclass(frozen=True)
class LineBreak:
    pass


@dataclass(frozen=True)
class EscapedChar:
    text: str


InlineNode = Text | Strong | Emphasis | CodeSpan | Strikethrough | Link | Image | LineBreak | EscapedChar


# ---------------------------------------------------------------------------
# Block nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Heading:
    level: int
    children: tuple[InlineNode, ...] = ()


@dataclass(frozen=True)
class Paragraph:
    children: tuple[InlineNode, ...] = ()


@dataclass(frozen=True)
class TextBlock:
    """Bare inline run inside a tight list item (no paragraph spacing)."""

    children: tuple[InlineNode, ...] = ()


@dataclass(frozen=True)
class Blockquote:
    children: tuple[BlockNode, ...] = ()


@dataclass(frozen=True)
class CodeBlock:
    text: str
    lang: str | None = None


@dataclass(frozen=True)
class ListItem:
    children: tuple[BlockNode, ...] = ()
    task: bool = False
    checked: bool = False


@dataclass(frozen=True)
class List:
    items: tuple[ListItem, ...] = ()
    ordered: bool = False
    start: int = 1


@dataclass(frozen=True)
class HorizontalRule:
    pass


@dataclass(frozen=True)
class TableCell:
    children: tuple[InlineNode, ...] = ()


@dataclass(frozen=True)
class Table:
    header: tuple[TableCell, ...] = ()
    rows: tuple[tuple[TableCell, ...], ...] = ()


@dataclass(frozen=True)
class RawHtml:
    text: str


@dataclass(frozen=True)
class BlankSpace:
    pass


BlockNode = (
    Heading
    | Paragraph
    | TextBlock
    | Blockquote
    | CodeBlock
    | List
    | ListItem
    | HorizontalRule
    | Table
    | RawHtml
    | BlankSpace
)

Node = BlockNode | InlineNode
