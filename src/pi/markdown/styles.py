"""Style model for markdown rendering: element styles, themes and presets."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from types import MappingProxyType
from typing import Any, Mapping

from pi.markdown import ansi
from pi.markdown.ansi import SGR


class ThemeError(ValueError):
    """Raised for unknown theme names, unknown theme keys or bad theme files."""


# ---------------------------------------------------------------------------
# Colours
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Indexed:
    """A basic SGR colour code such as ``SGR.FG_BRIGHT_CYAN`` (96)."""

    code: int


@dataclass(frozen=True)
class RGB:
    """A 24-bit true colour."""

    r: int
    g: int
    b: int


Color = Indexed | RGB


# ---------------------------------------------------------------------------
# ElementStyle
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ElementStyle:
    """Visual attributes for one markdown element.

    Every field is optional; ``None`` means "not specified" and never falls
    back to a default value.
    """

    color: Color | None = None
    background_color: Color | None = None
    bold: bool | None = None
    italic: bool | None = None
    underline: bool | None = None
    strikethrough: bool | None = None
    dim: bool | None = None
    inverse: bool | None = None
    prefix: str | None = None
    suffix: str | None = None
    indent: int | None = None
    margin: int | None = None
    padding: int | None = None
    border: str | None = None
    border_color: Color | None = None

    def merged(self, other: ElementStyle) -> ElementStyle:
        """Return a copy with every field *other* specifies taking precedence."""
        changes = {f.name: getattr(other, f.name) for f in fields(other) if getattr(other, f.name) is not None}
        return replace(self, **changes)


def apply_style(text: str, style: ElementStyle | None) -> str:
    """Render *text* with *style*.

    RGB colours are applied first as their own wrapped span; the prefix and
    suffix are then attached and the remaining attribute codes wrap the whole.
    """
    if style is None:
        return text

    codes: list[int] = []
    if style.bold:
        codes.append(SGR.BOLD)
    if style.dim:
        codes.append(SGR.DIM)
    if style.italic:
        codes.append(SGR.ITALIC)
    if style.underline:
        codes.append(SGR.UNDERLINE)
    if style.strikethrough:
        codes.append(SGR.STRIKETHROUGH)
    if style.inverse:
        codes.append(SGR.INVERSE)

    match style.color:
        case Indexed(code):
            codes.append(code)
        case RGB(r, g, b):
            text = ansi.fg_rgb(text, r, g, b)
        case None:
            pass

    match style.background_color:
        case Indexed(code):
            codes.append(code)
        case RGB(r, g, b):
            text = ansi.bg_rgb(text, r, g, b)
        case None:
            pass

    if style.prefix:
        text = style.prefix + text
    if style.suffix:
        text = text + style.suffix

    return ansi.style(text, *codes)


def color_text(text: str, color: Color | None) -> str:
    """Colour *text* with a foreground :data:`Color`, or leave it alone."""
    match color:
        case Indexed(code):
            return ansi.fg(text, code)
        case RGB(r, g, b):
            return ansi.fg_rgb(text, r, g, b)
        case _:
            return text


# ---------------------------------------------------------------------------
# Glyph records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Checkbox:
    checked: str
    unchecked: str


@dataclass(frozen=True)
class TableChars:
    """Glyphs used to draw table borders."""

    top_left: str
    top_mid: str
    top_right: str
    mid_left: str
    mid_mid: str
    mid_right: str
    bottom_left: str
    bottom_mid: str
    bottom_right: str
    horizontal: str
    vertical: str


BOX_TABLE_CHARS = TableChars(
    top_left="┌",
    top_mid="┬",
    top_right="┐",
    mid_left="├",
    mid_mid="┼",
    mid_right="┤",
    bottom_left="└",
    bottom_mid="┴",
    bottom_right="┘",
    horizontal="─",
    vertical="│",
)

ASCII_TABLE_CHARS = TableChars(
    top_left="+",
    top_mid="+",
    top_right="+",
    mid_left="+",
    mid_mid="+",
    mid_right="+",
    bottom_left="+",
    bottom_mid="+",
    bottom_right="+",
    horizontal="-",
    vertical="|",
)


# ---------------------------------------------------------------------------
# Theme
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Theme:
    """Complete style configuration for every markdown element."""

    # Block elements
    document: ElementStyle | None = None
    paragraph: ElementStyle | None = None
    heading: ElementStyle | None = None
    h1: ElementStyle | None = None
    h2: ElementStyle | None = None
    h3: ElementStyle | None = None
    h4: ElementStyle | None = None
    h5: ElementStyle | None = None
    h6: ElementStyle | None = None
    blockquote: ElementStyle | None = None
    code_block: ElementStyle | None = None
    code_language: ElementStyle | None = None
    list: ElementStyle | None = None
    list_item: ElementStyle | None = None
    table: ElementStyle | None = None
    table_header: ElementStyle | None = None
    table_cell: ElementStyle | None = None
    horizontal_rule: ElementStyle | None = None

    # Inline elements
    text: ElementStyle | None = None
    strong: ElementStyle | None = None
    emphasis: ElementStyle | None = None
    code: ElementStyle | None = None
    link: ElementStyle | None = None
    image: ElementStyle | None = None
    strikethrough: ElementStyle | None = None

    # Glyphs
    bullet: str | None = None
    bullet_color: int | None = None
    checkbox: Checkbox | None = None
    hr_char: str | None = None
    table_chars: TableChars = BOX_TABLE_CHARS


STYLE_KEYS: frozenset[str] = frozenset(
    f.name for f in fields(Theme) if f.name not in ("bullet", "bullet_color", "checkbox", "hr_char", "table_chars")
)
THEME_KEYS: frozenset[str] = frozenset(f.name for f in fields(Theme))

_HEADING_KEYS = frozenset(f"h{level}" for level in range(1, 7))


def resolve_style(theme: Theme, key: str) -> ElementStyle | None:
    """Look up the style for *key*; unknown keys resolve to ``None``.

    ``h1``..``h6`` fall back to ``heading`` when the theme leaves them unset.
    """
    if key not in STYLE_KEYS:
        return None
    found = getattr(theme, key)
    if found is None and key in _HEADING_KEYS:
        return theme.heading
    return found


def _as_style(key: str, value: Any) -> ElementStyle:
    if isinstance(value, ElementStyle):
        return value
    if isinstance(value, Mapping):
        try:
            return ElementStyle(**value)
        except TypeError as e:
            raise ThemeError(f"Invalid style for {key!r}: {e}") from e
    raise ThemeError(f"Expected a style for {key!r}, got {type(value).__name__}")


_GLYPH_RECORDS: dict[str, type] = {"checkbox": Checkbox, "table_chars": TableChars}


def _as_glyph_record(key: str, value: Any) -> Any:
    record = _GLYPH_RECORDS[key]
    if isinstance(value, record):
        return value
    if isinstance(value, Mapping):
        try:
            return record(**value)
        except TypeError as e:
            raise ThemeError(f"Invalid {key!r}: {e}") from e
    raise ThemeError(f"Expected {record.__name__} for {key!r}, got {type(value).__name__}")


def merge_themes(base: Theme, overrides: Mapping[str, Any]) -> Theme:
    """Return a new theme with *overrides* laid over *base*.

    Style entries are merged field by field (one level deep); glyph values
    replace the base value outright, and ``checkbox`` or ``table_chars`` may
    be given as plain mappings.  Keys not in *overrides* are untouched
    and neither argument is modified.
    """
    changes: dict[str, Any] = {}
    for key, value in overrides.items():
        if key not in THEME_KEYS:
            raise ThemeError(f"Unknown theme key: {key!r}")
        if value is None:
            continue
        if key in STYLE_KEYS:
            style = _as_style(key, value)
            current = getattr(base, key)
            changes[key] = current.merged(style) if current is not None else style
        elif key in _GLYPH_RECORDS:
            changes[key] = _as_glyph_record(key, value)
        else:
            changes[key] = value
    return replace(base, **changes)


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------

_IMAGE_ICON = "\U0001f5bc "

DARK_THEME = Theme(
    document=ElementStyle(),
    paragraph=ElementStyle(margin=1),
    heading=ElementStyle(bold=True, margin=1),
    h1=ElementStyle(color=Indexed(SGR.FG_BRIGHT_CYAN), bold=True, prefix="# "),
    h2=ElementStyle(color=Indexed(SGR.FG_BRIGHT_GREEN), bold=True, prefix="## "),
    h3=ElementStyle(color=Indexed(SGR.FG_BRIGHT_YELLOW), bold=True, prefix="### "),
    h4=ElementStyle(color=Indexed(SGR.FG_BRIGHT_MAGENTA), bold=True, prefix="#### "),
    h5=ElementStyle(color=Indexed(SGR.FG_BRIGHT_BLUE), bold=True, prefix="##### "),
    h6=ElementStyle(color=Indexed(SGR.FG_BRIGHT_WHITE), bold=True, prefix="###### "),
    blockquote=ElementStyle(
        color=Indexed(SGR.FG_BRIGHT_BLACK),
        italic=True,
        prefix="│ ",
        indent=2,
        margin=1,
    ),
    code_block=ElementStyle(
        color=Indexed(SGR.FG_BRIGHT_WHITE),
        background_color=Indexed(SGR.BG_BRIGHT_BLACK),
        padding=1,
        margin=1,
    ),
    code_language=ElementStyle(dim=True),
    list=ElementStyle(margin=1),
    list_item=ElementStyle(indent=2),
    table=ElementStyle(margin=1),
    table_header=ElementStyle(bold=True, color=Indexed(SGR.FG_BRIGHT_CYAN)),
    table_cell=ElementStyle(),
    horizontal_rule=ElementStyle(color=Indexed(SGR.FG_BRIGHT_BLACK), margin=1),
    text=ElementStyle(),
    strong=ElementStyle(bold=True, color=Indexed(SGR.FG_BRIGHT_WHITE)),
    emphasis=ElementStyle(italic=True),
    code=ElementStyle(color=Indexed(SGR.FG_BRIGHT_YELLOW), background_color=Indexed(SGR.BG_BRIGHT_BLACK)),
    link=ElementStyle(color=Indexed(SGR.FG_BRIGHT_BLUE), underline=True),
    image=ElementStyle(color=Indexed(SGR.FG_BRIGHT_MAGENTA), prefix=_IMAGE_ICON),
    strikethrough=ElementStyle(strikethrough=True, dim=True),
    bullet="•",
    bullet_color=SGR.FG_BRIGHT_CYAN,
    checkbox=Checkbox(checked="✓", unchecked="○"),
    hr_char="─",
)

LIGHT_THEME = replace(
    DARK_THEME,
    h1=ElementStyle(color=Indexed(SGR.FG_BLUE), bold=True, prefix="# "),
    h2=ElementStyle(color=Indexed(SGR.FG_GREEN), bold=True, prefix="## "),
    h3=ElementStyle(color=Indexed(SGR.FG_YELLOW), bold=True, prefix="### "),
    h4=ElementStyle(color=Indexed(SGR.FG_MAGENTA), bold=True, prefix="#### "),
    h5=ElementStyle(color=Indexed(SGR.FG_CYAN), bold=True, prefix="##### "),
    h6=ElementStyle(color=Indexed(SGR.FG_BLACK), bold=True, prefix="###### "),
    code_block=ElementStyle(
        color=Indexed(SGR.FG_BLACK),
        background_color=Indexed(SGR.BG_WHITE),
        padding=1,
        margin=1,
    ),
    table_header=ElementStyle(bold=True, color=Indexed(SGR.FG_BLUE)),
    strong=ElementStyle(bold=True),
    code=ElementStyle(color=Indexed(SGR.FG_RED), background_color=Indexed(SGR.BG_WHITE)),
    link=ElementStyle(color=Indexed(SGR.FG_BLUE), underline=True),
    image=ElementStyle(color=Indexed(SGR.FG_MAGENTA), prefix=_IMAGE_ICON),
    bullet_color=SGR.FG_BLUE,
)

ASCII_THEME = replace(
    DARK_THEME,
    blockquote=replace(DARK_THEME.blockquote, prefix="| "),
    code_block=ElementStyle(color=Indexed(SGR.FG_BRIGHT_WHITE), padding=1, margin=1),
    table_header=ElementStyle(bold=True),
    strong=ElementStyle(bold=True),
    code=ElementStyle(color=Indexed(SGR.FG_BRIGHT_YELLOW)),
    image=ElementStyle(color=Indexed(SGR.FG_BRIGHT_MAGENTA), prefix="[IMG] "),
    bullet="*",
    checkbox=Checkbox(checked="[x]", unchecked="[ ]"),
    hr_char="-",
    table_chars=ASCII_TABLE_CHARS,
)

NO_COLOR_THEME = Theme(
    document=ElementStyle(),
    paragraph=ElementStyle(margin=1),
    heading=ElementStyle(margin=1),
    h1=ElementStyle(prefix="# "),
    h2=ElementStyle(prefix="## "),
    h3=ElementStyle(prefix="### "),
    h4=ElementStyle(prefix="#### "),
    h5=ElementStyle(prefix="##### "),
    h6=ElementStyle(prefix="###### "),
    blockquote=ElementStyle(prefix="> ", indent=2, margin=1),
    code_block=ElementStyle(padding=1, margin=1),
    list=ElementStyle(margin=1),
    list_item=ElementStyle(indent=2),
    table=ElementStyle(margin=1),
    table_header=ElementStyle(),
    table_cell=ElementStyle(),
    horizontal_rule=ElementStyle(margin=1),
    text=ElementStyle(),
    strong=ElementStyle(),
    emphasis=ElementStyle(),
    code=ElementStyle(),
    link=ElementStyle(),
    image=ElementStyle(prefix="[IMG] "),
    strikethrough=ElementStyle(),
    bullet="-",
    checkbox=Checkbox(checked="[x]", unchecked="[ ]"),
    hr_char="-",
)

THEMES: Mapping[str, Theme] = MappingProxyType(
    {
        "dark": DARK_THEME,
        "light": LIGHT_THEME,
        "ascii": ASCII_THEME,
        "no-color": NO_COLOR_THEME,
        "plain": NO_COLOR_THEME,
    }
)


def get_theme(name: str) -> Theme:
    """Return the built-in theme called *name*."""
    try:
        return THEMES[name]
    except KeyError:
        raise ThemeError(f"Unknown theme {name!r} (expected one of: {', '.join(THEMES)})") from None
