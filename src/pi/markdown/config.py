"""Theme files: JSON overrides laid over a built-in preset.

A theme file names a ``base`` preset and overrides any theme key.  Keys may
be written in snake_case or in camelCase (``codeBlock``, ``hrChar``)::

    {
      "base": "dark",
      "h1": {"color": [255, 135, 0], "prefix": "> "},
      "codeBlock": {"padding": 2},
      "bullet": "-",
      "tableChars": "ascii"
    }

Colours are either a basic SGR code (``96``) or an ``[r, g, b]`` triple.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pi.markdown.styles import (
    ASCII_TABLE_CHARS,
    BOX_TABLE_CHARS,
    RGB,
    STYLE_KEYS,
    Checkbox,
    Color,
    ElementStyle,
    Indexed,
    Theme,
    ThemeError,
    get_theme,
    merge_themes,
)

logger = logging.getLogger(__name__)

ColorValue = int | tuple[int, int, int]

_TABLE_CHARS = {"box": BOX_TABLE_CHARS, "ascii": ASCII_TABLE_CHARS}


def _to_color(value: ColorValue | None) -> Color | None:
    if value is None:
        return None
    if isinstance(value, int):
        return Indexed(value)
    return RGB(*value)


# --- Schema ---


class StyleSpec(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    color: ColorValue | None = None
    background_color: ColorValue | None = Field(default=None, alias="backgroundColor")
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
    border_color: ColorValue | None = Field(default=None, alias="borderColor")

    def to_style(self) -> ElementStyle:
        values = self.model_dump(exclude_none=True)
        for key in ("color", "background_color", "border_color"):
            if key in values:
                values[key] = _to_color(getattr(self, key))
        return ElementStyle(**values)


class CheckboxSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    checked: str
    unchecked: str


class ThemeFile(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    base: str = "dark"

    document: StyleSpec | None = None
    paragraph: StyleSpec | None = None
    heading: StyleSpec | None = None
    h1: StyleSpec | None = None
    h2: StyleSpec | None = None
    h3: StyleSpec | None = None
    h4: StyleSpec | None = None
    h5: StyleSpec | None = None
    h6: StyleSpec | None = None
    blockquote: StyleSpec | None = None
    code_block: StyleSpec | None = Field(default=None, alias="codeBlock")
    code_language: StyleSpec | None = Field(default=None, alias="codeLanguage")
    list: StyleSpec | None = None
    list_item: StyleSpec | None = Field(default=None, alias="listItem")
    table: StyleSpec | None = None
    table_header: StyleSpec | None = Field(default=None, alias="tableHeader")
    table_cell: StyleSpec | None = Field(default=None, alias="tableCell")
    horizontal_rule: StyleSpec | None = Field(default=None, alias="horizontalRule")

    text: StyleSpec | None = None
    strong: StyleSpec | None = None
    emphasis: StyleSpec | None = None
    code: StyleSpec | None = None
    link: StyleSpec | None = None
    image: StyleSpec | None = None
    strikethrough: StyleSpec | None = None

    bullet: str | None = None
    bullet_color: int | None = Field(default=None, alias="bulletColor")
    checkbox: CheckboxSpec | None = None
    hr_char: str | None = Field(default=None, alias="hrChar")
    table_chars: Literal["box", "ascii"] | None = Field(default=None, alias="tableChars")

    def overrides(self) -> dict[str, Any]:
        """Theme overrides in the shape :func:`merge_themes` expects."""
        result: dict[str, Any] = {}
        for key in STYLE_KEYS:
            spec = getattr(self, key)
            if spec is not None:
                result[key] = spec.to_style()
        if self.bullet is not None:
            result["bullet"] = self.bullet
        if self.bullet_color is not None:
            result["bullet_color"] = self.bullet_color
        if self.checkbox is not None:
            result["checkbox"] = Checkbox(checked=self.checkbox.checked, unchecked=self.checkbox.unchecked)
        if self.hr_char is not None:
            result["hr_char"] = self.hr_char
        if self.table_chars is not None:
            result["table_chars"] = _TABLE_CHARS[self.table_chars]
        return result


# --- Loading ---


def theme_from_dict(data: Mapping[str, Any]) -> Theme:
    """Build a theme from an already-decoded theme file mapping."""
    try:
        spec = ThemeFile.model_validate(data)
    except ValidationError as e:
        raise ThemeError(f"Invalid theme: {e}") from e
    return merge_themes(get_theme(spec.base), spec.overrides())


def load_theme(path: str | Path) -> Theme:
    """Read a JSON theme file and return the resulting theme.

    Raises :class:`ThemeError` for malformed files and lets ``OSError``
    propagate for unreadable ones.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ThemeError(f"{path}: invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ThemeError(f"{path}: expected a JSON object, got {type(data).__name__}")

    try:
        theme = theme_from_dict(data)
    except ThemeError as e:
        raise ThemeError(f"{path}: {e}") from e

    logger.debug("Loaded theme file %s (base %r)", path, data.get("base", "dark"))
    return theme
