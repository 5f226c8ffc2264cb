"""Analytics commands: stats, characters and consistency checks."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape

from scripta.cli.commands.script import JsonOption, ScriptIdOption
from scripta.cli.formatters import JsonFormatter, TableFormatter, analytics_rows
from scripta.cli.utils.error_handler import handle_cli_error
from scripta.cli.utils.session import open_store
from scripta.document import validate_invariants

console = Console()


def stats_command(
    script_id: ScriptIdOption = None,
    json_output: JsonOption = False,
) -> None:
    """Show page count, scene count and dialogue/action balance."""
    try:
        analytics = open_store(script_id).get_analytics()
    except Exception as e:
        handle_cli_error(e, json_output=json_output)

    if json_output:
        typer.echo(JsonFormatter().format(analytics.model_dump(exclude={"characters"})))
        return
    TableFormatter(console).print(analytics_rows(analytics), title="Analytics")


def characters_command(
    script_id: ScriptIdOption = None,
    json_output: JsonOption = False,
) -> None:
    """List speaking characters, most frequent first."""
    try:
        store = open_store(script_id)
    except Exception as e:
        handle_cli_error(e, json_output=json_output)

    state = store.state
    characters = store.get_analytics().characters
    if json_output:
        typer.echo(JsonFormatter().format(characters))
        return

    numbers = {scene.id: scene.number for scene in state.scenes}
    rows = [
        {
            "name": character.name,
            "cues": character.dialogue_count,
            "scenes": ", ".join(
                str(numbers[s]) for s in character.scene_appearances if s in numbers
            ),
        }
        for character in characters
    ]
    TableFormatter(console).print(rows, title="Characters")


def check_command(
    script_id: ScriptIdOption = None,
) -> None:
    """Verify that scenes and characters agree with the element sequence."""
    try:
        state = open_store(script_id).state
    except Exception as e:
        handle_cli_error(e)

    problems = validate_invariants(state.elements, state.scenes, state.characters)
    if not problems:
        console.print("[green]✓[/green] Script structure is consistent")
        return
    for problem in problems:
        console.print(f"[red]✗[/red] {escape(problem)}", highlight=False)
    raise typer.Exit(1)
