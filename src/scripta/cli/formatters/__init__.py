"""CLI output formatters."""

from scripta.cli.formatters.base import OutputFormat, OutputFormatter
from scripta.cli.formatters.json_formatter import JsonFormatter
from scripta.cli.formatters.script_formatter import ScriptFormatter, analytics_rows
from scripta.cli.formatters.table_formatter import TableFormatter

__all__ = [
    "JsonFormatter",
    "OutputFormat",
    "OutputFormatter",
    "ScriptFormatter",
    "TableFormatter",
    "analytics_rows",
]
