"""Commands that edit individual elements of a script."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from scripta.cli.commands.script import JsonOption, ScriptIdOption
from scripta.cli.formatters import JsonFormatter
from scripta.cli.utils.error_handler import handle_cli_error
from scripta.cli.utils.session import (
    open_store,
    parse_element_type,
    resolve_element,
    save_store,
)
from scripta.models import ELEMENT_CONFIG, ScreenplayElement

console = Console()

ElementRef = Annotated[
    str, typer.Argument(help="Element position (1-based) or element id")
]


def _report(element: ScreenplayElement, verb: str, json_output: bool) -> None:
    if json_output:
        typer.echo(JsonFormatter().format_success(f"{verb} element", element))
        return
    label = ELEMENT_CONFIG[element.type].label
    console.print(
        f"[green]✓[/green] {verb} {label.lower()} [dim]{element.id}[/dim]: "
        f"{escape(element.content)}",
        highlight=False,
    )


def add_command(
    content: Annotated[str, typer.Argument(help="Element text")] = "",
    element_type: Annotated[
        str | None,
        typer.Option(
            "--type",
            "-T",
            help="Element type or shortcut digit (default: what Enter would insert)",
        ),
    ] = None,
    after: Annotated[
        str | None,
        typer.Option("--after", help="Insert after this element (default: last)"),
    ] = None,
    script_id: ScriptIdOption = None,
    json_output: JsonOption = False,
) -> None:
    """Insert a new element."""
    try:
        store = open_store(script_id)
        anchor = resolve_element(store, after) if after else store.elements[-1]
        new_type = (
            parse_element_type(element_type)
            if element_type
            else store.get_next_element_type(anchor.type)
        )
        element = store.insert_element_after(anchor.id, new_type, content)
        save_store(store)
    except Exception as e:
        handle_cli_error(e, json_output=json_output)

    if element is not None:
        _report(element, "Added", json_output)


def edit_command(
    ref: ElementRef,
    content: Annotated[str, typer.Argument(help="New element text")],
    script_id: ScriptIdOption = None,
    json_output: JsonOption = False,
) -> None:
    """Replace the text of an element."""
    try:
        store = open_store(script_id)
        element = resolve_element(store, ref)
        store.update_element(element.id, content)
        save_store(store)
        updated = store.get_element(element.id)
    except Exception as e:
        handle_cli_error(e, json_output=json_output)

    if updated is not None:
        _report(updated, "Updated", json_output)


def delete_command(
    ref: ElementRef,
    script_id: ScriptIdOption = None,
) -> None:
    """Delete an element. The last remaining element is never deleted."""
    try:
        store = open_store(script_id)
        element = resolve_element(store, ref)
        before = len(store.elements)
        store.delete_element(element.id)
        if len(store.elements) == before:
            console.print("[yellow]A script always keeps one element.[/yellow]")
            return
        save_store(store)
    except Exception as e:
        handle_cli_error(e)

    console.print(f"[green]✓[/green] Deleted element [dim]{element.id}[/dim]")


def set_type_command(
    ref: ElementRef,
    element_type: Annotated[
        str, typer.Argument(help="Element type or shortcut digit (1-7)")
    ],
    script_id: ScriptIdOption = None,
    json_output: JsonOption = False,
) -> None:
    """Force the type of an element."""
    try:
        store = open_store(script_id)
        element = resolve_element(store, ref)
        store.set_element_type(element.id, parse_element_type(element_type))
        save_store(store)
        updated = store.get_element(element.id)
    except Exception as e:
        handle_cli_error(e, json_output=json_output)

    if updated is not None:
        _report(updated, "Retyped", json_output)


def cycle_command(
    ref: ElementRef,
    script_id: ScriptIdOption = None,
    json_output: JsonOption = False,
) -> None:
    """Advance an element to the next type, as Tab does in the editor."""
    try:
        store = open_store(script_id)
        element = resolve_element(store, ref)
        store.cycle_element_type(element.id)
        save_store(store)
        updated = store.get_element(element.id)
    except Exception as e:
        handle_cli_error(e, json_output=json_output)

    if updated is not None:
        _report(updated, "Retyped", json_output)
