"""Configuration management commands for Scripta."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from scripta.config import get_settings
from scripta.config.template import get_default_config_path, write_config_template

console = Console()

config_app = typer.Typer(
    name="config",
    help="Manage Scripta configuration",
    pretty_exceptions_enable=False,
)


@config_app.command(name="show")
def config_show() -> None:
    """Display the effective configuration after merging all sources."""
    settings = get_settings()
    table = Table(title="Scripta Configuration", header_style="bold magenta")
    table.add_column("Setting")
    table.add_column("Value")
    for field_name in type(settings).model_fields:
        value = getattr(settings, field_name)
        table.add_row(field_name, Text("" if value is None else str(value)))
    console.print(table)


@config_app.command(name="init")
def config_init(
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Where to write the template (default: ~/.config/scripta/config.yaml)",
        ),
    ] = None,
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Overwrite an existing file")
    ] = False,
) -> None:
    """Write a commented configuration template."""
    output_path = output or get_default_config_path()
    try:
        written = write_config_template(output_path, force=force)
    except FileExistsError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        console.print("[yellow]→ Use --force to overwrite[/yellow]")
        raise typer.Exit(1) from e
    console.print(
        f"[green]✓[/green] Configuration template written to {escape(str(written))}"
    )
