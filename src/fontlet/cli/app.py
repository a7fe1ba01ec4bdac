"""Typer CLI application: the interactive picker plus one-shot commands."""

from __future__ import annotations

import json
import termios
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape

from fontlet.config import AppConfig
from fontlet.core.font import FontEntry
from fontlet.errors import FontDiscoveryError, RenderError, SaveError, ToolNotFoundError
from fontlet.figlet.discovery import discover_fonts
from fontlet.figlet.runner import FigletTool
from fontlet.io.writer import save_text

FigletOption = Annotated[str, typer.Option("--figlet", help="figlet executable name or path")]
FontDirOption = Annotated[
    Optional[Path],
    typer.Option("--font-dir", "-d", help="Read fonts from this directory instead of figlet's own"),
]


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="fontlet",
        help="Preview your text in every installed figlet font and pick one.",
        rich_markup_mode="rich",
    )
    console = Console()
    err_console = Console(stderr=True)

    def locate(config: AppConfig) -> FigletTool:
        try:
            return locate_tool(config)
        except ToolNotFoundError as e:
            err_console.print(f"[bold red]{escape(str(e))}[/]")
            raise typer.Exit(1)

    def launch(text: str, font_dir: Optional[Path], figlet: str, no_color: bool) -> None:
        from fontlet.cli.studio.picker import run_picker

        config = AppConfig.from_options(
            figlet_path=figlet,
            font_dir=font_dir,
            initial_text=text,
            no_color=no_color,
        )
        tool = locate(config)
        try:
            run_picker(config, tool)
        except (termios.error, OSError) as e:
            err_console.print(f"[red]Error running program: {escape(str(e))}[/]")
            raise typer.Exit(1)

    @app.callback(invoke_without_command=True)
    def default(
        ctx: typer.Context,
        text: Annotated[str, typer.Option("--text", "-t", help="Pre-fill the text to render")] = "",
        font_dir: FontDirOption = None,
        figlet: FigletOption = "figlet",
        no_color: Annotated[bool, typer.Option("--no-color", help="Disable colours")] = False,
    ) -> None:
        """Launch the interactive picker when no command is given."""
        if ctx.invoked_subcommand is None:
            launch(text, font_dir, figlet, no_color)

    @app.command()
    def pick(
        text: Annotated[str, typer.Option("--text", "-t", help="Pre-fill the text to render")] = "",
        font_dir: FontDirOption = None,
        figlet: FigletOption = "figlet",
        no_color: Annotated[bool, typer.Option("--no-color", help="Disable colours")] = False,
    ) -> None:
        """Launch the interactive font picker."""
        launch(text, font_dir, figlet, no_color)

    @app.command()
    def fonts(
        font_dir: FontDirOption = None,
        figlet: FigletOption = "figlet",
        json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
    ) -> None:
        """List installed figlet fonts."""
        config = AppConfig.from_options(figlet_path=figlet, font_dir=font_dir)
        tool = locate(config)
        try:
            found = discover_fonts(tool, config.font_dir, config.font_suffix, config.search_dirs)
        except FontDiscoveryError as e:
            err_console.print(f"[red]{escape(str(e))}[/]")
            raise typer.Exit(1)

        if json_output:
            print(json.dumps([{"name": f.name, "path": f.path} for f in found], indent=2))
            return

        for font in found:
            console.print(f"[bold]{escape(font.name)}[/]  [dim]{escape(font.path)}[/]")
        console.print(f"\n[bold]{len(found)} fonts[/]")

    @app.command()
    def render(
        text: Annotated[str, typer.Argument(help="Text to render")],
        font: Annotated[str, typer.Option("--font", "-f", help="Font name or path to a font file")] = "standard",
        width: Annotated[Optional[int], typer.Option("--width", "-w", help="Wrap width", min=1)] = None,
        output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Save to this file")] = None,
        font_dir: FontDirOption = None,
        figlet: FigletOption = "figlet",
    ) -> None:
        """Render TEXT once, without the picker."""
        config = AppConfig.from_options(figlet_path=figlet, font_dir=font_dir)
        tool = locate(config)

        try:
            font_path = _resolve_font(tool, font, config)
            rendered = tool.render(font_path, text, width)
        except (FontDiscoveryError, RenderError) as e:
            err_console.print(f"[red]{escape(str(e))}[/]")
            raise typer.Exit(1)

        if output is None:
            print(rendered, end="")
            return

        try:
            written = save_text(output, rendered)
        except SaveError as e:
            err_console.print(f"[red]{escape(str(e))}[/]")
            raise typer.Exit(1)
        console.print(f"[green]Saved to {escape(str(written))}[/]")

    return app


def locate_tool(config: AppConfig) -> FigletTool:
    """Find the configured figlet executable, bounded by the configured render timeout."""
    return FigletTool.locate(config.figlet_path, timeout=config.render_timeout)


def _resolve_font(tool: FigletTool, font: str, config: AppConfig) -> str:
    """Map a font name (or file path) to the path figlet should load."""
    if Path(font).is_file():
        return font

    found = discover_fonts(tool, config.font_dir, config.font_suffix, config.search_dirs)
    match = _find_font(found, font)
    if match is None:
        raise FontDiscoveryError(f"no font named '{font}' (try `fontlet fonts`)")
    return match.path


def _find_font(fonts: list[FontEntry], name: str) -> Optional[FontEntry]:
    """Exact name first, then a case-insensitive match."""
    for font in fonts:
        if font.name == name:
            return font
    lowered = name.lower()
    for font in fonts:
        if font.name.lower() == lowered:
            return font
    return None
