"""Commands that create, list and show whole scripts."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from scripta.cli.formatters import (
    JsonFormatter,
    OutputFormat,
    ScriptFormatter,
    TableFormatter,
)
from scripta.cli.utils.error_handler import handle_cli_error
from scripta.cli.utils.session import create_store, open_store, save_store
from scripta.config import get_logger

logger = get_logger(__name__)
console = Console()

ScriptIdOption = Annotated[
    str | None,
    typer.Option("--id", "-i", help="Script id (default: first saved script)"),
]
JsonOption = Annotated[bool, typer.Option("--json", help="Output as JSON")]


def new_command(
    title: Annotated[
        str, typer.Option("--title", "-t", help="Script title")
    ] = "Untitled Screenplay",
    author: Annotated[str, typer.Option("--author", "-a", help="Author")] = "",
    heading: Annotated[
        str, typer.Option("--heading", help="Text of the opening scene heading")
    ] = "",
    json_output: JsonOption = False,
) -> None:
    """Start a new script and save it."""
    try:
        store = create_store()
        store.set_title(title)
        store.set_author(author)
        if heading:
            store.update_element(store.elements[0].id, heading)
        save_store(store)
    except Exception as e:
        handle_cli_error(e, json_output=json_output)

    state = store.state
    if json_output:
        typer.echo(
            JsonFormatter().format_success("Created script", {"id": state.id})
        )
        return
    console.print(
        f"[green]✓[/green] Created [bold]{escape(state.title)}[/bold] ({state.id})"
    )


def list_command(
    json_output: JsonOption = False,
    markdown: Annotated[
        bool, typer.Option("--markdown", help="Output as a Markdown table")
    ] = False,
) -> None:
    """List saved scripts."""
    try:
        store = create_store()
        records = store.repository.list_records()
    except Exception as e:
        handle_cli_error(e, json_output=json_output)

    rows = [
        {
            "id": record.id,
            "title": record.title,
            "author": record.author,
            "elements": len(record.elements),
            "scenes": len(record.scenes),
            "saved_at": record.saved_at.isoformat(timespec="seconds"),
        }
        for record in records
    ]
    if json_output:
        typer.echo(JsonFormatter().format(rows))
        return
    formatter = TableFormatter(console)
    if markdown:
        typer.echo(formatter.format(rows, OutputFormat.MARKDOWN))
        return
    formatter.print(rows, title="Saved scripts")


def show_command(
    script_id: ScriptIdOption = None,
    json_output: JsonOption = False,
    fountain: Annotated[
        bool, typer.Option("--fountain", help="Show as Fountain text")
    ] = False,
) -> None:
    """Show a script, one numbered element per block."""
    try:
        store = open_store(script_id)
    except Exception as e:
        handle_cli_error(e, json_output=json_output)

    state = store.state
    if json_output:
        typer.echo(JsonFormatter().format(state.to_record()))
        return
    formatter = ScriptFormatter(console)
    if fountain:
        typer.echo(formatter.format(state, OutputFormat.MARKDOWN), nl=False)
        return
    console.print(formatter.render(state))


def meta_command(
    script_id: ScriptIdOption = None,
    title: Annotated[str | None, typer.Option("--title", "-t", help="New title")] = None,
    author: Annotated[
        str | None, typer.Option("--author", "-a", help="New author")
    ] = None,
) -> None:
    """Change the title or author of a script."""
    try:
        store = open_store(script_id)
        if title is not None:
            store.set_title(title)
        if author is not None:
            store.set_author(author)
        if store.is_dirty:
            save_store(store)
    except Exception as e:
        handle_cli_error(e)

    state = store.state
    console.print(
        f"[green]✓[/green] {escape(state.title)} "
        f"by {escape(state.author or 'Unknown')}",
        highlight=False,
    )


def remove_command(
    script_id: Annotated[str, typer.Argument(help="Id of the script to delete")],
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Do not ask for confirmation")
    ] = False,
) -> None:
    """Delete a saved script."""
    try:
        store = open_store(script_id)
    except Exception as e:
        handle_cli_error(e)

    title = store.state.title
    if not force and not typer.confirm(f"Delete '{title}' ({script_id})?"):
        console.print("[yellow]Cancelled.[/yellow]")
        raise typer.Exit(0)
    store.repository.delete(script_id)
    console.print(f"[green]✓[/green] Deleted {escape(title)}", highlight=False)
