"""Main CLI entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console

from scripta import __version__
from scripta.cli.commands import (
    add_command,
    characters_command,
    check_command,
    cycle_command,
    delete_command,
    edit_command,
    list_command,
    meta_command,
    new_command,
    remove_command,
    reorder_command,
    scenes_command,
    set_type_command,
    show_command,
    stats_command,
)
from scripta.cli.commands.config import config_app
from scripta.cli.commands.export import export_app
from scripta.cli.formatters.json_formatter import JsonFormatter
from scripta.cli.utils.error_handler import handle_cli_error
from scripta.config import (
    configure_logging,
    get_logger,
    get_settings_for_cli,
    set_settings,
)

logger = get_logger(__name__)
console = Console()

app = typer.Typer(
    name="scripta",
    help="Screenplay editing from the terminal",
    pretty_exceptions_enable=False,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="new")(new_command)
app.command(name="list")(list_command)
app.command(name="ls")(list_command)  # Alias for list command
app.command(name="show")(show_command)
app.command(name="meta")(meta_command)
app.command(name="remove")(remove_command)
app.command(name="add")(add_command)
app.command(name="edit")(edit_command)
app.command(name="delete")(delete_command)
app.command(name="set-type")(set_type_command)
app.command(name="cycle")(cycle_command)
app.command(name="scenes")(scenes_command)
app.command(name="reorder")(reorder_command)
app.command(name="characters")(characters_command)
app.command(name="stats")(stats_command)
app.command(name="check")(check_command)

app.add_typer(export_app, name="export")
app.add_typer(config_app, name="config")


@app.command()
def version(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show Scripta version."""
    if json_output:
        print(JsonFormatter().format({"name": "Scripta", "version": __version__}))
    else:
        console.print(f"Scripta v{__version__}")


@app.callback()
def main_callback(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            envvar="SCRIPTA_CONFIG",
        ),
    ] = None,
    storage_path: Annotated[
        Path | None,
        typer.Option("--storage-path", help="Directory holding saved scripts"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging (INFO level)"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging"),
    ] = False,
) -> None:
    """Configure global options."""
    overrides: dict[str, Any] = {"storage_path": storage_path}
    if debug:
        overrides.update(debug=True, log_level="DEBUG")
    elif verbose:
        overrides["log_level"] = "INFO"

    try:
        settings = get_settings_for_cli(config_file=config, cli_overrides=overrides)
    except Exception as e:
        handle_cli_error(e, verbose=debug)

    set_settings(settings)
    configure_logging(settings)
    logger.debug(
        "Settings loaded",
        config_file=str(config) if config else None,
        storage_path=str(settings.storage_path),
    )


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
