"""Table output formatter for CLI."""

from __future__ import annotations

import csv
import io
from typing import Any

from rich.table import Table
from rich.text import Text

from scripta.cli.formatters.base import OutputFormat, OutputFormatter


class TableFormatter(OutputFormatter[list[dict[str, Any]]]):
    """Formatter for tabular data output."""

    def build_table(self, data: list[dict[str, Any]], title: str | None = None) -> Table:
        """Build a Rich table with one column per key of the first row."""
        table = Table(title=title, show_header=True, header_style="bold magenta")
        columns = list(data[0].keys()) if data else []
        for col in columns:
            table.add_column(col.replace("_", " ").title())
        for row in data:
            table.add_row(*[Text(str(row.get(col, ""))) for col in columns])
        return table

    def format(
        self, data: list[dict[str, Any]], format_type: OutputFormat = OutputFormat.CSV
    ) -> str:
        """Format tabular data as CSV or Markdown text.

        Args:
            data: List of dictionaries to format as table
            format_type: CSV or MARKDOWN; anything else falls back to CSV

        Returns:
            Formatted string
        """
        if not data:
            return "No data to display"
        if format_type == OutputFormat.MARKDOWN:
            return self._format_markdown(data)
        return self._format_csv(data)

    def print(
        self,
        data: list[dict[str, Any]],
        format_type: OutputFormat = OutputFormat.TABLE,
        title: str | None = None,
    ) -> None:
        """Print data as a Rich table, or as text for other formats."""
        if format_type != OutputFormat.TABLE:
            super().print(data, format_type)
            return
        if not data:
            self.console.print("[dim]No data to display[/dim]")
            return
        self.console.print(self.build_table(data, title))

    def _format_csv(self, data: list[dict[str, Any]]) -> str:
        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=list(data[0].keys()))
        writer.writeheader()
        writer.writerows(data)
        return output.getvalue()

    def _format_markdown(self, data: list[dict[str, Any]]) -> str:
        columns = list(data[0].keys())
        lines = [
            "| " + " | ".join(col.replace("_", " ").title() for col in columns) + " |",
            "|" + "|".join(" --- " for _ in columns) + "|",
        ]
        for row in data:
            lines.append(
                "| " + " | ".join(str(row.get(col, "")) for col in columns) + " |"
            )
        return "\n".join(lines)
