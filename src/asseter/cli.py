"""
Command line interface for rendering HTML asset tags.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import ConfigError, ManifestConfig, get_settings, load_config
from .render import RenderReport, html, render_manifest
from .util import write_text_file

console = Console()
app = typer.Typer(help="Build HTML tags for stylesheets, scripts and images.")
logger = logging.getLogger(__name__)

LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]


def _configure_logging(level_name: str) -> None:
    env_override = os.getenv("ASSETER_LOG_LEVEL") or get_settings().log_level
    level_str = (env_override or level_name or "warning").upper()
    if level_str not in {lvl.upper() for lvl in LOG_LEVELS}:
        level_str = "WARNING"
    logging.basicConfig(
        level=getattr(logging, level_str, logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.debug("Logging configured at %s", level_str)


def _resolve_config_path(value: Path) -> Path:
    """Ensure manifest path exists and return absolute path."""
    resolved = value.expanduser().resolve()
    if not resolved.exists():
        raise typer.BadParameter(f"No manifest file found at {resolved}")
    if not resolved.is_file():
        raise typer.BadParameter(f"Manifest path must be a file, got directory: {resolved}")
    return resolved


def _parse_attributes(values: Optional[List[str]]) -> List[str]:
    for item in values or []:
        name, sep, _ = item.partition("=")
        if not sep or not name:
            raise typer.BadParameter(f"Attributes must look like NAME=VALUE, got {item!r}")
    return values or []


def _build_attributes(pairs: Optional[List[str]], flags: Optional[List[str]]) -> Dict[Any, Any]:
    attrs: Dict[Any, Any] = {}
    for item in pairs or []:
        name, _, value = item.partition("=")
        attrs[name] = value
    for index, flag in enumerate(flags or []):
        attrs[index] = flag
    return attrs


def _xhtml(flag: bool) -> bool:
    return flag or get_settings().xhtml_style


def _load_config_or_exit(path: Path) -> ManifestConfig:
    try:
        return load_config(path)
    except ConfigError as exc:
        console.print(f"[bold red]Configuration error:[/] {exc}")
        raise typer.Exit(code=1) from exc


def _emit(markup: str, output: Optional[Path]) -> None:
    if output is None:
        typer.echo(markup)
        return
    target = write_text_file(output, markup + "\n")
    console.print(f"[bold green]Wrote[/] {target}")


def _print_render_report(report: RenderReport) -> None:
    table = Table(title="Render Summary")
    table.add_column("Key")
    table.add_column("Value", overflow="fold")
    for key, value in report.summary_rows():
        table.add_row(key, value)
    console.print(table)


ATTR_OPTION = typer.Option(
    None,
    "--attr",
    "-a",
    help="Attribute as NAME=VALUE (multiple allowed, kept in order).",
    callback=_parse_attributes,
)
FLAG_OPTION = typer.Option(
    None,
    "--flag",
    help="Boolean attribute such as defer or disabled (multiple allowed).",
)
XHTML_OPTION = typer.Option(
    False,
    "--xhtml",
    help="Render XHTML style (also enabled by ASSETER_XHTML_STYLE).",
)
OUTPUT_OPTION = typer.Option(
    None,
    "--output",
    "-o",
    help="Write the markup to this file instead of stdout.",
)
INLINE_OPTION = typer.Option(
    False,
    "--inline",
    help="Embed SRC in the tag instead of referencing it.",
)


@app.callback(invoke_without_command=True)
def _root_command(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show asseter version and exit.",
        is_flag=True,
    ),
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        help="Logging level (critical, error, warning, info, debug).",
        show_default=True,
        case_sensitive=False,
    ),
) -> None:
    """
    Default command when no subcommand is selected.
    """
    _configure_logging(log_level)

    if version:
        console.print(f"[bold green]asseter[/] {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print("Package: [bold]asseter[/]")
        console.print("=" * 25)
        console.print(
            "Run [cyan]asseter --help[/] to list the tag commands, or "
            "[cyan]asseter render --config assets.toml[/] to render a manifest.",
        )


@app.command()
def attrs(
    pairs: List[str] = typer.Argument(..., help="Attributes as NAME=VALUE.", callback=_parse_attributes),
    flag: Optional[List[str]] = FLAG_OPTION,
    xhtml: bool = XHTML_OPTION,
) -> None:
    """
    Print an attribute string.
    """
    typer.echo(html.attributes_to_string(_build_attributes(pairs, flag), _xhtml(xhtml)))


@app.command("tag")
def tag_command(
    name: str = typer.Argument(..., help="Tag name, e.g. div or br."),
    attr: Optional[List[str]] = ATTR_OPTION,
    flag: Optional[List[str]] = FLAG_OPTION,
    content: Optional[str] = typer.Option(None, "--content", "-c", help="Tag body; omit for a content-less tag."),
    xhtml: bool = XHTML_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
) -> None:
    """
    Print an arbitrary tag.
    """
    _emit(html.tag(name, _build_attributes(attr, flag), content, _xhtml(xhtml)), output)


@app.command()
def css(
    src: str = typer.Argument(..., help="Stylesheet URI, or CSS text with --inline."),
    inline: bool = INLINE_OPTION,
    attr: Optional[List[str]] = ATTR_OPTION,
    flag: Optional[List[str]] = FLAG_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
) -> None:
    """
    Print a <link> tag, or a <style> block with --inline.
    """
    _emit(html.css(src, _build_attributes(attr, flag), inline=inline), output)


@app.command()
def script(
    src: str = typer.Argument(..., help="Script URI, or JavaScript source with --inline."),
    inline: bool = INLINE_OPTION,
    attr: Optional[List[str]] = ATTR_OPTION,
    flag: Optional[List[str]] = FLAG_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
) -> None:
    """
    Print a <script> tag.
    """
    _emit(html.script(src, _build_attributes(attr, flag), inline=inline), output)


@app.command()
def img(
    src: str = typer.Argument(..., help="Image URI, or base64 data with --inline."),
    inline: bool = INLINE_OPTION,
    mime_type: Optional[str] = typer.Option(None, "--mime-type", help="Media type for --inline (default: image)."),
    charset: Optional[str] = typer.Option(None, "--charset", help="Charset for --inline data."),
    attr: Optional[List[str]] = ATTR_OPTION,
    flag: Optional[List[str]] = FLAG_OPTION,
    xhtml: bool = XHTML_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
) -> None:
    """
    Print an <img> tag.
    """
    if not inline and (mime_type or charset):
        raise typer.BadParameter("--mime-type and --charset only apply with --inline.")
    attributes = _build_attributes(attr, flag)
    if mime_type:
        attributes["mime-type"] = mime_type
    if charset:
        attributes["charset"] = charset
    _emit(html.img(src, attributes, inline=inline, xhtml_style=_xhtml(xhtml)), output)


@app.command()
def render(
    config: Path = typer.Option(
        ...,
        "--config",
        "-c",
        help="Path to the TOML asset manifest.",
        callback=_resolve_config_path,
    ),
    output: Optional[Path] = OUTPUT_OPTION,
    summary: bool = typer.Option(
        True,
        "--summary/--no-summary",
        help="Show a summary table (only when writing to --output).",
    ),
) -> None:
    """
    Render every asset listed in a manifest.
    """
    logger.info("Loading manifest from %s", config)
    manifest = _load_config_or_exit(config)
    report = render_manifest(manifest)
    _emit(report.markup, output)
    if output is not None and summary:
        _print_render_report(report)


def main() -> None:
    """
    Entry-point used by the console script defined in pyproject.toml.
    """
    app()
