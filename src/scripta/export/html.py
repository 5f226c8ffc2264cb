"""Print-ready HTML export."""

from __future__ import annotations

from html import escape

from scripta.export.options import ExportOptions
from scripta.models import ElementType

# Industry-standard screenplay page geometry
PRINT_CONFIG = {
    "page_width": 8.5,  # inches
    "page_height": 11,  # inches
    "margin_top": 1,
    "margin_bottom": 1,
    "margin_left": 1.5,
    "margin_right": 1,
    "font_size": 12,  # points
    "line_height": 12,  # points
    "chars_per_line": 60,
    "lines_per_page": 55,
}

# Indents in character widths from the left margin
ELEMENT_MARGINS: dict[ElementType, dict[str, int]] = {
    ElementType.SCENE_HEADING: {"left": 0, "right": 0},
    ElementType.ACTION: {"left": 0, "right": 0},
    ElementType.CHARACTER: {"left": 22, "right": 0},
    ElementType.DIALOGUE: {"left": 10, "right": 10},
    ElementType.PARENTHETICAL: {"left": 15, "right": 15},
    ElementType.TRANSITION: {"left": 40, "right": 0},
    ElementType.SHOT: {"left": 0, "right": 0},
}

PRINT_STYLES = """
    @page {
      size: letter;
      margin: 1in 1in 1in 1.5in;
    }

    * {
      margin: 0;
      padding: 0;
      box-sizing: border-box;
    }

    body {
      font-family: 'Courier Prime', 'Courier New', Courier, monospace;
      font-size: 12pt;
      line-height: 1;
      color: #000;
      background: #fff;
    }

    .title-page {
      height: 100vh;
      display: flex;
      flex-direction: column;
      justify-content: center;
      align-items: center;
      text-align: center;
      page-break-after: always;
    }

    .title-page h1 {
      font-size: 24pt;
      font-weight: normal;
      text-transform: uppercase;
      margin-bottom: 24pt;
    }

    .title-page .author {
      font-size: 12pt;
      margin-top: 48pt;
    }

    .screenplay {
      max-width: 6in;
    }

    .element {
      margin: 0;
      padding: 0;
      white-space: pre-wrap;
    }

    .scene-heading {
      text-transform: uppercase;
      font-weight: bold;
      margin-top: 24pt;
      margin-bottom: 12pt;
    }

    .action {
      margin-top: 12pt;
      margin-bottom: 12pt;
    }

    .character {
      text-transform: uppercase;
      margin-left: 2.2in;
      margin-top: 12pt;
      margin-bottom: 0;
    }

    .dialogue {
      margin-left: 1in;
      margin-right: 1in;
      margin-top: 0;
      margin-bottom: 12pt;
    }

    .parenthetical {
      margin-left: 1.5in;
      margin-right: 1.5in;
      margin-top: 0;
      margin-bottom: 0;
    }

    .transition {
      text-transform: uppercase;
      text-align: right;
      margin-top: 12pt;
      margin-bottom: 12pt;
    }

    .shot {
      text-transform: uppercase;
      margin-top: 12pt;
      margin-bottom: 12pt;
    }

    @media print {
      body {
        -webkit-print-color-adjust: exact;
        print-color-adjust: exact;
      }
    }
"""


def generate_print_html(options: ExportOptions) -> str:
    """Render a self-contained HTML document laid out for printing.

    All user text is escaped, so element content can never become markup.
    """
    title = escape(options.title or "Untitled Screenplay")
    author = escape(options.author or "Unknown")

    parts = [
        "<!DOCTYPE html>\n",
        "<html>\n<head>\n",
        '<meta charset="utf-8">\n',
        f"<title>{title}</title>\n",
        f"<style>{PRINT_STYLES}</style>\n",
        "</head>\n<body>\n",
    ]

    if options.include_title_page:
        parts.append(
            '<div class="title-page">\n'
            f"<h1>{title}</h1>\n"
            '<div class="author">\n'
            "<p>Written by</p>\n"
            f"<p>{author}</p>\n"
            "</div>\n"
            "</div>\n"
        )

    parts.append('<div class="screenplay">\n')
    for element in options.elements:
        parts.append(
            f'<p class="element {element.type.value}">{escape(element.content)}</p>\n'
        )
    parts.append("</div>\n</body>\n</html>\n")

    return "".join(parts)
