"""Scene listing and reordering commands."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from scripta.cli.commands.script import JsonOption, ScriptIdOption
from scripta.cli.formatters import JsonFormatter, TableFormatter
from scripta.cli.utils.error_handler import handle_cli_error
from scripta.cli.utils.session import open_store, save_store
from scripta.document import DocumentStore
from scripta.exceptions import ValidationError

console = Console()


def _scene_rows(store: DocumentStore) -> list[dict[str, object]]:
    return [
        {
            "number": scene.number,
            "heading": scene.heading or "(untitled)",
            "elements": len(scene.element_ids),
            "id": scene.id,
        }
        for scene in store.state.scenes
    ]


def scenes_command(
    script_id: ScriptIdOption = None,
    json_output: JsonOption = False,
) -> None:
    """List the scenes of a script in order."""
    try:
        store = open_store(script_id)
    except Exception as e:
        handle_cli_error(e, json_output=json_output)

    if json_output:
        typer.echo(JsonFormatter().format(store.state.scenes))
        return
    TableFormatter(console).print(_scene_rows(store), title="Scenes")


def reorder_command(
    from_number: Annotated[int, typer.Argument(help="Number of the scene to move")],
    to_number: Annotated[int, typer.Argument(help="Scene number it should become")],
    script_id: ScriptIdOption = None,
) -> None:
    """Move a scene, with all of its elements, to a new position."""
    try:
        store = open_store(script_id)
        count = len(store.state.scenes)
        if not 1 <= from_number <= count:
            raise ValidationError(
                message=f"No scene number {from_number}",
                hint=f"Scene numbers run from 1 to {count}",
            )
        store.reorder_scenes(from_number - 1, to_number - 1)
        save_store(store)
    except Exception as e:
        handle_cli_error(e)

    TableFormatter(console).print(_scene_rows(store), title="Scenes")
