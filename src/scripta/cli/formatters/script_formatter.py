"""Terminal rendering of a script."""

from __future__ import annotations

import textwrap

from rich.text import Text

from scripta.analytics import ScriptAnalytics
from scripta.cli.formatters.base import OutputFormat, OutputFormatter
from scripta.document import ScriptState
from scripta.export import ELEMENT_MARGINS, PRINT_CONFIG
from scripta.export.fountain import export_to_fountain
from scripta.export.options import ExportOptions
from scripta.models import ELEMENT_CONFIG, ElementType, ScreenplayElement

_STYLES: dict[ElementType, str] = {
    ElementType.SCENE_HEADING: "bold",
    ElementType.CHARACTER: "bold cyan",
    ElementType.PARENTHETICAL: "italic",
    ElementType.TRANSITION: "magenta",
    ElementType.SHOT: "yellow",
}


class ScriptFormatter(OutputFormatter[ScriptState]):
    """Formats a script as an indented screenplay page."""

    def format(
        self, data: ScriptState, format_type: OutputFormat = OutputFormat.TEXT
    ) -> str:
        """Format a script as Fountain text or as an indented page."""
        if format_type == OutputFormat.MARKDOWN:
            return export_to_fountain(ExportOptions.from_state(data))
        return self.render(data, numbered=False).plain

    def render(self, state: ScriptState, numbered: bool = True) -> Text:
        """Lay out every element with its print indents.

        Args:
            state: Script to render
            numbered: Prefix each element with its 1-based position
        """
        width = int(PRINT_CONFIG["chars_per_line"])
        out = Text()
        out.append(f"{state.title or 'Untitled Screenplay'}\n", style="bold underline")
        if state.author:
            out.append(f"by {state.author}\n", style="dim")

        for position, element in enumerate(state.elements, start=1):
            if element.type in {
                ElementType.SCENE_HEADING,
                ElementType.ACTION,
                ElementType.CHARACTER,
                ElementType.TRANSITION,
                ElementType.SHOT,
            }:
                out.append("\n")
            prefix = f"{position:>4} " if numbered else ""
            for line in self._lines(element, width):
                out.append(prefix, style="dim")
                out.append(line + "\n", style=_STYLES.get(element.type, ""))
                prefix = "     " if numbered else ""
        return out

    def _lines(self, element: ScreenplayElement, width: int) -> list[str]:
        margins = ELEMENT_MARGINS[element.type]
        content = element.content
        if element.type == ElementType.PARENTHETICAL and content:
            content = f"({content.strip('()')})"
        if not content:
            content = f"[{ELEMENT_CONFIG[element.type].placeholder}]"
        text_width = max(10, width - margins["left"] - margins["right"])
        lines: list[str] = []
        for paragraph in content.split("\n"):
            lines.extend(textwrap.wrap(paragraph, text_width) or [""])
        return [" " * margins["left"] + line for line in lines]


def analytics_rows(analytics: ScriptAnalytics) -> list[dict[str, object]]:
    """Analytics summary as metric/value rows."""
    return [
        {"metric": "Pages", "value": analytics.page_count},
        {
            "metric": "Runtime",
            "value": f"~{analytics.estimated_runtime_minutes} minutes",
        },
        {"metric": "Scenes", "value": analytics.scene_count},
        {"metric": "Characters", "value": analytics.character_count},
        {"metric": "Dialogue", "value": f"{analytics.dialogue}%"},
        {"metric": "Action", "value": f"{analytics.action}%"},
        {"metric": "Ratio", "value": analytics.ratio},
    ]
