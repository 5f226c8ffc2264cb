"""Tests for CLI output formatters."""

import json
from io import StringIO

from rich.console import Console

from scripta.cli.formatters import (
    JsonFormatter,
    OutputFormat,
    ScriptFormatter,
    TableFormatter,
    analytics_rows,
)
from scripta.exceptions import StorageError


def make_console():
    """A console that records into a string buffer."""
    return Console(file=StringIO(), width=100, color_system=None)


class TestJsonFormatter:
    """Test JSON output."""

    def test_models_use_saved_field_names(self, populated_store):
        """Pydantic models are dumped with camelCase aliases."""
        scenes = populated_store.state.scenes

        data = json.loads(JsonFormatter().format(scenes))

        assert data[0]["elementIds"] == scenes[0].element_ids
        assert data[1]["heading"] == "EXT. GARDEN - NIGHT"

    def test_success_envelope(self):
        """Success responses carry a message and optional data."""
        data = json.loads(JsonFormatter().format_success("Saved", {"id": "x"}))
        assert data == {"success": True, "message": "Saved", "data": {"id": "x"}}

    def test_error_envelope_uses_error_message(self):
        """Scripta errors report their message, not their repr."""
        error = StorageError(message="Failed to save script", hint="Check disk")

        data = json.loads(JsonFormatter().format_error_response(error, code=2))

        assert data == {"success": False, "error": "Failed to save script", "code": 2}


class TestTableFormatter:
    """Test tabular output."""

    rows = [
        {"scene_number": 1, "heading": "INT. HOUSE - DAY"},
        {"scene_number": 2, "heading": "EXT. GARDEN - NIGHT"},
    ]

    def test_csv_is_default(self):
        """Text output defaults to CSV."""
        text = TableFormatter(make_console()).format(self.rows)
        assert text.splitlines() == [
            "scene_number,heading",
            "1,INT. HOUSE - DAY",
            "2,EXT. GARDEN - NIGHT",
        ]

    def test_markdown(self):
        """Markdown tables title-case the headers."""
        text = TableFormatter(make_console()).format(self.rows, OutputFormat.MARKDOWN)

        lines = text.splitlines()
        assert lines[0] == "| Scene Number | Heading |"
        assert lines[2] == "| 1 | INT. HOUSE - DAY |"

    def test_empty(self):
        """Empty data says so."""
        console = make_console()
        formatter = TableFormatter(console)

        assert formatter.format([]) == "No data to display"
        formatter.print([])
        assert "No data to display" in console.file.getvalue()

    def test_print_table(self):
        """Rows are printed as a Rich table."""
        console = make_console()

        TableFormatter(console).print(self.rows, title="Scenes")

        output = console.file.getvalue()
        assert "Scenes" in output
        assert "EXT. GARDEN - NIGHT" in output


class TestScriptFormatter:
    """Test the terminal page renderer."""

    def test_render_numbers_elements(self, populated_store):
        """Each element is prefixed with its position."""
        text = ScriptFormatter(make_console()).render(populated_store.state).plain

        assert "   1 INT. HOUSE - DAY" in text
        assert "   9" in text

    def test_plain_text_has_indents(self, populated_store):
        """Dialogue is indented further than action."""
        text = ScriptFormatter(make_console()).format(populated_store.state)
        lines = text.splitlines()

        action = next(line for line in lines if "John enters." in line)
        dialogue = next(line for line in lines if "Hello." in line)
        assert len(dialogue) - len(dialogue.lstrip()) > len(action) - len(
            action.lstrip()
        )

    def test_empty_element_shows_placeholder(self, store):
        """Empty elements show their placeholder."""
        text = ScriptFormatter(make_console()).format(store.state)
        assert "[INT./EXT. LOCATION - TIME]" in text

    def test_fountain(self, populated_store):
        """Markdown output is the Fountain export."""
        text = ScriptFormatter(make_console()).format(
            populated_store.state, OutputFormat.MARKDOWN
        )
        assert "\n===\n\n" in text
        assert "\nMARY\nWho's there?\n" in text

    def test_analytics_rows(self, populated_store):
        """The analytics summary becomes metric rows."""
        rows = analytics_rows(populated_store.get_analytics())

        by_metric = {row["metric"]: row["value"] for row in rows}
        assert by_metric["Pages"] == 1
        assert by_metric["Runtime"] == "~1 minutes"
        assert by_metric["Scenes"] == 2
        assert by_metric["Characters"] == 2
