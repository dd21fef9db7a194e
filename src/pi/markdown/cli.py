"""CLI entry point for pi-markdown. Uses Click for argument parsing."""

from __future__ import annotations

import logging
import shutil
import sys
from pathlib import Path

import click

from pi.markdown.ansi import strip_ansi
from pi.markdown.config import load_theme
from pi.markdown.renderer import RenderOptions, render
from pi.markdown.styles import THEMES, ThemeError, get_theme


def _read_source(source: str) -> str:
    if source == "-":
        return click.get_text_stream("stdin").read()
    return Path(source).read_text(encoding="utf-8")


@click.command()
@click.argument("source", default="-", type=click.Path(dir_okay=False, allow_dash=True))
@click.option(
    "--theme",
    "theme_name",
    type=click.Choice(list(THEMES)),
    default="dark",
    show_default=True,
    envvar="PI_MARKDOWN_THEME",
    help="Built-in theme",
)
@click.option(
    "--theme-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON theme file (overrides --theme)",
)
@click.option(
    "--width",
    type=int,
    default=0,
    show_default=True,
    envvar="PI_MARKDOWN_WIDTH",
    help="Wrap width; 0 disables wrapping, -1 uses the terminal width",
)
@click.option("--show-urls", is_flag=True, help="Append link targets after link text")
@click.option("--strip", "strip", is_flag=True, help="Print plain text without escape codes")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(source, theme_name, theme_file, width, show_urls, strip, verbose):
    """Render a markdown file (or stdin) as styled terminal text."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        theme = load_theme(theme_file) if theme_file else get_theme(theme_name)
        markdown = _read_source(source)
    except (ThemeError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if width < 0:
        width = shutil.get_terminal_size().columns

    output = render(markdown, RenderOptions(theme=theme, width=width, show_urls=show_urls))
    if strip:
        output = strip_ansi(output)
    click.echo(output)


if __name__ == "__main__":
    main()
