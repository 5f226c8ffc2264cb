"""Export commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from scripta.cli.commands.script import ScriptIdOption
from scripta.cli.utils.error_handler import handle_cli_error
from scripta.cli.utils.session import open_store
from scripta.config import get_logger
from scripta.exceptions import ExportError
from scripta.export import (
    BrowserPrintPipeline,
    ExportOptions,
    export_to_fountain,
    export_to_pdf,
    generate_print_html,
    write_fountain,
)

logger = get_logger(__name__)
console = Console()

export_app = typer.Typer(
    name="export",
    help="Export a script as Fountain, print HTML or PDF",
    pretty_exceptions_enable=False,
    add_completion=False,
)


def _options(script_id: str | None, title_page: bool | None = None) -> ExportOptions:
    store = open_store(script_id)
    include = store.settings.include_title_page if title_page is None else title_page
    return ExportOptions.from_state(store.state, include_title_page=include)


@export_app.command(name="fountain")
def export_fountain(
    script_id: ScriptIdOption = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Directory to write <title>.fountain into (default: print to stdout)",
        ),
    ] = None,
) -> None:
    """Export as Fountain plain text."""
    try:
        options = _options(script_id)
        if output is None:
            typer.echo(export_to_fountain(options), nl=False)
            return
        path = write_fountain(options, output)
    except Exception as e:
        handle_cli_error(e)

    console.print(f"[green]✓[/green] Wrote {escape(str(path))}", highlight=False)


@export_app.command(name="html")
def export_html(
    script_id: ScriptIdOption = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="File to write (default: stdout)"),
    ] = None,
    title_page: Annotated[
        bool | None,
        typer.Option("--title-page/--no-title-page", help="Include a title page"),
    ] = None,
) -> None:
    """Export as print-ready HTML."""
    try:
        document = generate_print_html(_options(script_id, title_page))
        if output is None:
            typer.echo(document, nl=False)
            return
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(document, encoding="utf-8")
        except OSError as e:
            raise ExportError(
                message=f"Could not write {output}",
                hint="Check that the output directory is writable",
                details={"path": str(output), "error": str(e)},
            ) from e
    except Exception as e:
        handle_cli_error(e)

    logger.info("Exported print HTML", path=str(output))
    console.print(f"[green]✓[/green] Wrote {escape(str(output))}", highlight=False)


@export_app.command(name="pdf")
def export_pdf(
    script_id: ScriptIdOption = None,
    title_page: Annotated[
        bool | None,
        typer.Option("--title-page/--no-title-page", help="Include a title page"),
    ] = None,
) -> None:
    """Open the print view in a browser to print or save as PDF."""
    try:
        export_to_pdf(_options(script_id, title_page), BrowserPrintPipeline())
    except Exception as e:
        handle_cli_error(e)

    console.print("[green]✓[/green] Opened print view; use your browser to save a PDF")
