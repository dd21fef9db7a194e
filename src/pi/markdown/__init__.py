"""pi-markdown: render markdown as styled terminal text.

Supports themes, word wrapping, and box-drawn tables and blockquotes.
"""

from __future__ import annotations

from typing import Any, Callable

from pi.markdown import ansi

# ANSI utilities
from pi.markdown.ansi import SGR, strip_ansi, visible_length

# Theme loading
from pi.markdown.config import load_theme, theme_from_dict

# Front end
from pi.markdown.parser import parse

# Core renderer
from pi.markdown.renderer import (
    RenderContext,
    RenderOptions,
    render,
    render_document,
    render_with_theme,
)

# Styles and themes
from pi.markdown.styles import (
    ASCII_TABLE_CHARS,
    ASCII_THEME,
    BOX_TABLE_CHARS,
    DARK_THEME,
    LIGHT_THEME,
    NO_COLOR_THEME,
    RGB,
    THEMES,
    Checkbox,
    Color,
    ElementStyle,
    Indexed,
    TableChars,
    Theme,
    ThemeError,
    apply_style,
    get_theme,
    merge_themes,
    resolve_style,
)
from pi.markdown.table import render_table
from pi.markdown.utils import wrap_text


# ---------------------------------------------------------------------------
# Convenience functions
# ---------------------------------------------------------------------------


def render_dark(markdown: str, **options: Any) -> str:
    return render(markdown, theme=DARK_THEME, **options)


def render_light(markdown: str, **options: Any) -> str:
    return render(markdown, theme=LIGHT_THEME, **options)


def render_ascii(markdown: str, **options: Any) -> str:
    return render(markdown, theme=ASCII_THEME, **options)


def render_plain(markdown: str, **options: Any) -> str:
    return render(markdown, theme=NO_COLOR_THEME, **options)


def create_renderer(**defaults: Any) -> Callable[..., str]:
    """Return a render function with pre-configured option defaults.

    Options passed to the returned function override *defaults*.
    """

    def _render(markdown: str, **options: Any) -> str:
        return render(markdown, **{**defaults, **options})

    return _render


__all__ = [
    # ANSI
    "ansi",
    "SGR",
    "strip_ansi",
    "visible_length",
    # Renderer
    "RenderContext",
    "RenderOptions",
    "parse",
    "render",
    "render_document",
    "render_with_theme",
    "render_dark",
    "render_light",
    "render_ascii",
    "render_plain",
    "create_renderer",
    # Styles
    "ASCII_TABLE_CHARS",
    "ASCII_THEME",
    "BOX_TABLE_CHARS",
    "DARK_THEME",
    "LIGHT_THEME",
    "NO_COLOR_THEME",
    "RGB",
    "THEMES",
    "Checkbox",
    "Color",
    "ElementStyle",
    "Indexed",
    "TableChars",
    "Theme",
    "ThemeError",
    "apply_style",
    "get_theme",
    "merge_themes",
    "resolve_style",
    # Config
    "load_theme",
    "theme_from_dict",
    # Layout
    "render_table",
    "wrap_text",
]
