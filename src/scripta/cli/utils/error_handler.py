"""Error handling utilities for CLI commands."""

from __future__ import annotations

import traceback
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from scripta.cli.formatters.json_formatter import JsonFormatter
from scripta.config import get_logger
from scripta.exceptions import ScriptaError

logger = get_logger(__name__)
console = Console(stderr=True)


def handle_cli_error(
    error: Exception,
    verbose: bool = False,
    json_output: bool = False,
    exit_code: int = 1,
) -> NoReturn:
    """Report an error from a CLI command and exit.

    Args:
        error: The exception that was raised
        verbose: Whether to show detailed error information
        json_output: Emit a JSON error response on stdout instead of text
        exit_code: Exit code to use when exiting
    """
    if json_output:
        typer.echo(JsonFormatter().format_error_response(error, exit_code))
    elif isinstance(error, ScriptaError):
        console.print(f"[red]✗ {escape(error.message)}[/red]", highlight=False)
        if error.hint:
            console.print(f"[yellow]→ {escape(error.hint)}[/yellow]", highlight=False)
        if verbose and error.details:
            console.print("\n[dim]Details:[/dim]")
            for key, value in error.details.items():
                console.print(
                    f"  [dim]{escape(str(key))}:[/dim] {escape(str(value))}",
                    highlight=False,
                )
    elif isinstance(error, FileNotFoundError):
        console.print(
            f"[red]✗ File not found: {escape(str(error))}[/red]", highlight=False
        )
        console.print("[yellow]→ Check that the file path is correct[/yellow]")
    else:
        console.print(
            f"[red]✗ Unexpected error: {escape(str(error))}[/red]", highlight=False
        )
        if verbose:
            console.print("\n[dim]Full traceback:[/dim]")
            console.print(traceback.format_exc(), markup=False)
        else:
            console.print("[dim]Run with --verbose for full error details[/dim]")

    if isinstance(error, ScriptaError):
        logger.error(
            "Scripta error occurred",
            error_type=type(error).__name__,
            message=error.message,
            hint=error.hint,
            details=error.details,
            exit_code=exit_code,
        )
    else:
        logger.error(
            "Command failed",
            error_type=type(error).__name__,
            error=str(error),
            exit_code=exit_code,
        )

    raise typer.Exit(exit_code) from error
